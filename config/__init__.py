"""
配置管理模块

导出配置相关的类和函数
"""

from .config import (
    Config,
    ConfigManager,
    StorageConfig,
    LoggingConfig,
    APIConfig,
)

__all__ = [
    "Config",
    "ConfigManager",
    "StorageConfig",
    "LoggingConfig",
    "APIConfig",
]
