"""
FileHub - 单目录网络文件存储服务
"""

__version__ = "1.0.0"
