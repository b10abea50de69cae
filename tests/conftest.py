"""
Pytest 配置文件

设置测试环境，提供共享夹具
"""

import os
import sys
from pathlib import Path

import pytest

# 添加项目根目录到 Python 路径（未安装时也能导入 filehub 与 config）
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from config import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """清除 FILEHUB_ 前缀的环境变量，避免影响配置测试"""
    for key in list(os.environ):
        if key.startswith("FILEHUB_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def uploads_dir(tmp_path):
    """存储根目录（尚未创建）"""
    return tmp_path / "uploads"


@pytest.fixture
def access_log(tmp_path):
    """访问日志路径"""
    return tmp_path / "access.log"


@pytest.fixture
def app_config(uploads_dir, access_log):
    """指向临时目录的应用配置"""
    return Config(
        environment="test",
        storage={
            "uploads_dir": str(uploads_dir),
            "access_log": str(access_log),
        },
        logging={"file": None},
    )
