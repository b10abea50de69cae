"""
路由依赖

从应用状态中获取启动时构建的组件
"""

from fastapi import Request

from filehub.filestore import FlatFileStore


def get_file_store(request: Request) -> FlatFileStore:
    """获取当前应用的文件存储"""
    return request.app.state.file_store


__all__ = ["get_file_store"]
