"""
访问日志

每个请求在分发之前追加一行到访问日志文件：
[<ISO-8601 时间戳>] <HTTP 方法> <原始请求路径及查询串>

写入失败只记录到诊断日志，不影响响应。
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from fastapi import Request
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """UTC 时间戳，毫秒精度，Z 后缀（如 2024-05-01T08:30:00.123Z）"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def request_target(request: Request) -> str:
    """
    获取原始请求目标（路径 + 查询串）

    优先使用 ASGI scope 中未解码的 raw_path，保持与客户端发送的一致
    """
    raw_path = request.scope.get("raw_path")
    path = raw_path.decode("latin-1").split("?", 1)[0] if raw_path else request.url.path

    query_string = request.scope.get("query_string", b"")
    if query_string:
        return f"{path}?{query_string.decode('latin-1')}"
    return path


class AccessLogger:
    """
    访问日志记录器

    每次写入都以追加模式打开文件并在写完后关闭，
    不持有文件句柄，多个并发请求共享同一日志文件。
    """

    def __init__(self, log_path: Union[str, Path]):
        """
        初始化访问日志记录器

        Args:
            log_path: 访问日志文件路径
        """
        self.log_path = Path(log_path)

    @staticmethod
    def format_entry(method: str, target: str, now: Optional[datetime] = None) -> str:
        """
        格式化日志行

        Args:
            method: HTTP 方法
            target: 原始请求路径及查询串
            now: 时间，默认当前时间

        Returns:
            以换行结尾的日志行
        """
        return f"[{iso_timestamp(now)}] {method} {target}\n"

    def record(self, method: str, target: str) -> bool:
        """
        追加一条访问记录

        Args:
            method: HTTP 方法
            target: 原始请求路径及查询串

        Returns:
            是否写入成功；失败时仅记录诊断日志，不抛出异常
        """
        entry = self.format_entry(method, target)
        try:
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(entry)
        except OSError as e:
            logger.error(f"写入访问日志失败: {self.log_path} - {e}")
            return False
        return True


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    访问日志中间件

    在路由分发之前记录请求，写入在线程池中完成，不阻塞事件循环。
    """

    def __init__(self, app, access_logger: AccessLogger):
        """
        初始化访问日志中间件

        Args:
            app: ASGI 应用
            access_logger: 访问日志记录器
        """
        super().__init__(app)
        self.access_logger = access_logger

    async def dispatch(self, request: Request, call_next):
        await run_in_threadpool(
            self.access_logger.record,
            request.method,
            request_target(request),
        )
        return await call_next(request)


__all__ = [
    "AccessLogger",
    "AccessLogMiddleware",
    "iso_timestamp",
    "request_target",
]
