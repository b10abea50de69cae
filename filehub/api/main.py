"""
FileHub FastAPI 服务

通过查询串参数对单一存储目录中的文件进行增删改查，
每个请求在分发前写入访问日志。
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Config
from filehub import __version__
from filehub.api.access_log import AccessLogger, AccessLogMiddleware
from filehub.api.errors import (
    FileOperationError,
    file_operation_exception_handler,
    http_exception_handler,
    global_exception_handler,
)
from filehub.api.routes import files
from filehub.filestore import FlatFileStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    config: Config = app.state.config
    logger.info(f"Server is running on port {config.api.port}")
    logger.info(f"存储目录: {app.state.file_store.root}, 访问日志: {app.state.access_logger.log_path}")

    yield

    logger.info("FileHub 服务已关闭")


def create_app(config: Config) -> FastAPI:
    """
    创建 FastAPI 应用

    存储根目录在此处创建，确保服务开始接受连接之前目录已存在。

    Args:
        config: 应用配置

    Returns:
        FastAPI 应用
    """
    file_store = FlatFileStore(
        root=config.storage.uploads_path,
        confine_to_root=config.storage.confine_to_root,
    )
    file_store.ensure_root()

    access_logger = AccessLogger(config.storage.access_log_path)

    # 只保留五个文件路由，其余路径一律 404
    app = FastAPI(
        title="FileHub",
        description="单目录网络文件存储",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.file_store = file_store
    app.state.access_logger = access_logger

    # 访问日志中间件
    app.add_middleware(AccessLogMiddleware, access_logger=access_logger)

    # ===== 异常处理 =====
    app.add_exception_handler(FileOperationError, file_operation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # ===== 注册路由 =====
    app.include_router(files.router)

    return app


__all__ = ["create_app"]
