"""
API 错误处理模块

所有错误响应均为纯文本，响应体与状态码一一对应。
"""

import logging

from fastapi import Request, status
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


# ===== 响应文本 =====

class Messages:
    """标准响应文本"""

    FILE_CREATED = "File created successfully"
    FILE_MODIFIED = "File modified successfully"
    FILE_DELETED = "File deleted successfully"

    FILENAME_AND_CONTENT_REQUIRED = "Filename and content are required"
    FILENAME_REQUIRED = "Filename is required"
    FILE_NOT_FOUND = "File not found"

    NOT_FOUND = "Not Found"
    INTERNAL_ERROR = "Internal Server Error"


# ===== 自定义异常 =====

class FileOperationError(Exception):
    """
    文件操作异常基类

    由路由处理函数抛出，经异常处理器转换为纯文本响应。
    """

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationException(FileOperationError):
    """缺少必填参数"""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST)


class FileReadException(FileOperationError):
    """文件读取失败（不存在或其他读取错误均返回 400）"""

    def __init__(self):
        super().__init__(
            message=Messages.FILE_NOT_FOUND,
            status_code=status.HTTP_400_BAD_REQUEST
        )


class StorageException(FileOperationError):
    """文件系统写入、删除或枚举失败"""

    def __init__(self):
        super().__init__(
            message=Messages.INTERNAL_ERROR,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


# ===== 错误处理函数 =====

def text_response(message: str, status_code: int = status.HTTP_200_OK) -> PlainTextResponse:
    """
    创建纯文本响应

    Args:
        message: 响应文本
        status_code: HTTP 状态码

    Returns:
        纯文本响应
    """
    return PlainTextResponse(content=message, status_code=status_code)


async def file_operation_exception_handler(request: Request, exc: FileOperationError) -> PlainTextResponse:
    """文件操作异常处理器"""
    return text_response(exc.message, exc.status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """
    HTTP 异常处理器

    路由未匹配时返回 404 "Not Found"，其他 HTTP 异常保留原状态码
    """
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return text_response(Messages.NOT_FOUND, status.HTTP_404_NOT_FOUND)

    logger.warning(f"HTTP 异常: {exc.status_code} - {exc.detail}")
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return PlainTextResponse(content=detail, status_code=exc.status_code, headers=exc.headers)


async def global_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """
    全局异常处理器

    记录堆栈，向客户端只返回通用错误文本
    """
    logger.error(f"未处理的异常: {request.method} {request.url.path} - {exc}", exc_info=True)

    return text_response(Messages.INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)


__all__ = [
    "Messages",
    "FileOperationError",
    "ValidationException",
    "FileReadException",
    "StorageException",
    "text_response",
    "file_operation_exception_handler",
    "http_exception_handler",
    "global_exception_handler",
]
