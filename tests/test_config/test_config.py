"""
配置管理系统单元测试
"""

import pytest
import yaml

from config import (
    Config,
    ConfigManager,
    StorageConfig,
    LoggingConfig,
    APIConfig,
)


class TestStorageConfig:
    """测试存储配置"""

    def test_default_values(self):
        config = StorageConfig()
        assert config.uploads_dir == "./uploads"
        assert config.access_log == "./access.log"
        assert config.confine_to_root is True

    def test_paths_expand_user(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        config = StorageConfig(uploads_dir="~/files")
        assert config.uploads_path == tmp_path / "files"


class TestLoggingConfig:
    """测试日志配置"""

    def test_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            LoggingConfig(level="LOUD")


class TestAPIConfig:
    """测试服务配置"""

    def test_default_port(self):
        assert APIConfig().port == 8080

    def test_port_range(self):
        with pytest.raises(ValueError):
            APIConfig(port=70000)


class TestConfig:
    """测试总配置"""

    def test_defaults(self):
        config = Config()
        assert config.environment == "development"
        assert isinstance(config.storage, StorageConfig)

    def test_invalid_environment(self):
        with pytest.raises(ValueError):
            Config(environment="staging")


class TestConfigManager:
    """测试配置管理器"""

    def test_missing_file_uses_defaults(self, tmp_path):
        manager = ConfigManager(str(tmp_path / "absent.yaml"))
        config = manager.load()
        assert config.api.port == 8080

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({
            "environment": "production",
            "storage": {"uploads_dir": "/srv/files"},
            "api": {"port": 9000},
        }))

        config = ConfigManager(str(path)).load()

        assert config.environment == "production"
        assert config.storage.uploads_dir == "/srv/files"
        assert config.storage.access_log == "./access.log"
        assert config.api.port == 9000

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({"api": {"port": 9000, "host": "127.0.0.1"}}))

        monkeypatch.setenv("FILEHUB_API__PORT", "9100")
        monkeypatch.setenv("FILEHUB_STORAGE__CONFINE_TO_ROOT", "false")

        config = ConfigManager(str(path)).load()

        assert config.api.port == 9100
        assert config.api.host == "127.0.0.1"
        assert config.storage.confine_to_root is False

    def test_parse_env_value(self):
        assert ConfigManager._parse_env_value("true") is True
        assert ConfigManager._parse_env_value("No") is False
        assert ConfigManager._parse_env_value("42") == 42
        assert ConfigManager._parse_env_value("0.5") == 0.5
        assert ConfigManager._parse_env_value("./uploads") == "./uploads"

    def test_load_is_cached_until_reload(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({"api": {"port": 9000}}))
        manager = ConfigManager(str(path))

        first = manager.load()
        path.write_text(yaml.safe_dump({"api": {"port": 9001}}))

        assert manager.load() is first
        assert manager.reload().api.port == 9001

    def test_save_round_trip(self, tmp_path):
        source = tmp_path / "settings.yaml"
        source.write_text(yaml.safe_dump({"storage": {"uploads_dir": "/data"}}))
        manager = ConfigManager(str(source))

        target = tmp_path / "out" / "saved.yaml"
        manager.save(str(target))

        saved = yaml.safe_load(target.read_text())
        assert saved["storage"]["uploads_dir"] == "/data"
        assert saved["api"]["port"] == 8080
