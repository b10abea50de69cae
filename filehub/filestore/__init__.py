"""
文件系统模块

提供存储根目录下的扁平文件存取
"""

from .file_store import FlatFileStore

from .security import (
    SecurePathResolver,
    UnsafeFilenameError,
)

__all__ = [
    "FlatFileStore",
    "SecurePathResolver",
    "UnsafeFilenameError",
]
