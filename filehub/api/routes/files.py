"""
文件操作路由

五个精确路径，不区分 HTTP 方法，所有参数均来自查询串：
/createFile  /getFiles  /getFile  /modifyFile  /deleteFile
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.routing import APIRoute
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Match

from filehub.api.dependencies import get_file_store
from filehub.api.errors import (
    Messages,
    ValidationException,
    FileReadException,
    StorageException,
    text_response,
)
from filehub.filestore import FlatFileStore

logger = logging.getLogger(__name__)


class AnyMethodRoute(APIRoute):
    """
    不区分 HTTP 方法的路由

    只按路径匹配，任意方法（包括 TRACE、PROPFIND 等非标准方法）都分发到同一处理函数，
    不会产生 405。
    """

    def matches(self, scope):
        match, child_scope = super().matches(scope)
        if match == Match.PARTIAL:
            return Match.FULL, child_scope
        return match, child_scope

    async def handle(self, scope, receive, send):
        await self.app(scope, receive, send)


router = APIRouter(route_class=AnyMethodRoute)


def _write_file(
    store: FlatFileStore,
    filename: Optional[str],
    content: Optional[str],
    success_message: str,
) -> PlainTextResponse:
    """创建与修改共用的完整覆盖写入"""
    if not filename or not content:
        raise ValidationException(Messages.FILENAME_AND_CONTENT_REQUIRED)

    try:
        store.write(filename, content.encode("utf-8"))
    except (OSError, ValueError) as e:
        logger.error(f"写入文件失败: {filename!r} - {e}")
        raise StorageException()

    return text_response(success_message)


# ===== 端点 =====

@router.api_route("/createFile", methods=["GET"])
def create_file(
    filename: Optional[str] = None,
    content: Optional[str] = None,
    store: FlatFileStore = Depends(get_file_store),
):
    """
    创建文件

    - filename: 文件名（必填）
    - content: 文件内容（必填），已存在的同名文件会被完整覆盖
    """
    return _write_file(store, filename, content, Messages.FILE_CREATED)


@router.api_route("/getFiles", methods=["GET"])
def get_files(store: FlatFileStore = Depends(get_file_store)):
    """
    列出存储根目录下的所有条目名称

    返回 JSON 数组，顺序取决于文件系统
    """
    try:
        names = store.list_names()
    except OSError as e:
        logger.error(f"读取存储目录失败: {store.root} - {e}")
        raise StorageException()

    return JSONResponse(content=names)


@router.api_route("/getFile", methods=["GET"])
def get_file(
    filename: Optional[str] = None,
    store: FlatFileStore = Depends(get_file_store),
):
    """
    读取文件原始内容

    文件不存在或读取出错时统一返回 400 "File not found"
    """
    if not filename:
        raise ValidationException(Messages.FILENAME_REQUIRED)

    try:
        data = store.read(filename)
    except (OSError, ValueError) as e:
        logger.error(f"读取文件失败: {filename!r} - {e}")
        raise FileReadException()

    return Response(content=data, media_type="text/plain")


@router.api_route("/modifyFile", methods=["GET"])
def modify_file(
    filename: Optional[str] = None,
    content: Optional[str] = None,
    store: FlatFileStore = Depends(get_file_store),
):
    """
    修改文件

    与创建完全相同的覆盖语义，文件不存在时直接创建
    """
    return _write_file(store, filename, content, Messages.FILE_MODIFIED)


@router.api_route("/deleteFile", methods=["GET"])
def delete_file(
    filename: Optional[str] = None,
    store: FlatFileStore = Depends(get_file_store),
):
    """
    删除文件

    文件不存在也视为删除失败，返回 500
    """
    if not filename:
        raise ValidationException(Messages.FILENAME_REQUIRED)

    try:
        store.delete(filename)
    except (OSError, ValueError) as e:
        logger.error(f"删除文件失败: {filename!r} - {e}")
        raise StorageException()

    logger.info(f"文件已删除: {filename}")
    return text_response(Messages.FILE_DELETED)


__all__ = ["router"]
