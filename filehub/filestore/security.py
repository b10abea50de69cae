"""
安全路径解析

防止文件名逃逸出存储根目录
"""

from pathlib import Path


class UnsafeFilenameError(ValueError):
    """文件名不安全（可能导致路径遍历）"""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"Unsafe filename {filename!r}: {reason}")


class SecurePathResolver:
    """
    安全路径解析器

    将客户端提供的文件名解析为存储根目录下的物理路径
    """

    # 禁止的特殊字符
    FORBIDDEN_CHARS = ("\x00", "\n", "\r")

    def __init__(self, root: Path):
        """
        初始化路径解析器

        Args:
            root: 存储根目录
        """
        self.root = Path(root)

    def resolve(self, filename: str) -> Path:
        """
        解析文件名为物理路径

        安全措施:
        1. 验证文件名格式
        2. 禁止路径遍历
        3. 确保路径在存储根目录内

        Args:
            filename: 客户端提供的文件名

        Returns:
            存储根目录下的文件路径

        Raises:
            UnsafeFilenameError: 文件名不安全
        """
        self.validate_filename(filename)

        file_path = self.root / filename

        resolved = file_path.resolve()
        root_resolved = self.root.resolve()
        if resolved.parent != root_resolved:
            raise UnsafeFilenameError(filename, "path outside storage root")

        return file_path

    def validate_filename(self, filename: str) -> None:
        """
        验证文件名格式

        Args:
            filename: 文件名

        Raises:
            UnsafeFilenameError: 文件名不合法
        """
        if not filename:
            raise UnsafeFilenameError(filename, "empty filename")

        # 禁止路径分隔符
        if "/" in filename or "\\" in filename:
            raise UnsafeFilenameError(filename, "path separators are not allowed")

        # 禁止路径遍历
        if filename in (".", ".."):
            raise UnsafeFilenameError(filename, "relative path components are not allowed")

        if any(char in filename for char in self.FORBIDDEN_CHARS):
            raise UnsafeFilenameError(filename, "control characters are not allowed")


__all__ = [
    "UnsafeFilenameError",
    "SecurePathResolver",
]
