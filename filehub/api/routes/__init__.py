"""
API 路由
"""

from . import files

__all__ = ["files"]
