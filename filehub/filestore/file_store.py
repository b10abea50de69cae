"""
扁平文件存储

单一目录下的文件存取，文件系统是唯一的持久化层
"""

import logging
import os
from pathlib import Path
from typing import List, Union

from filehub.filestore.security import SecurePathResolver

logger = logging.getLogger(__name__)


class FlatFileStore:
    """
    扁平文件存储

    所有文件直接位于存储根目录下，以文件名作为唯一标识。
    不维护任何内存索引或缓存，每次操作都直接访问文件系统。

    示例:
        >>> store = FlatFileStore(Path("./uploads"))
        >>> store.ensure_root()
        >>> store.write("a.txt", b"hello")
        >>> store.read("a.txt")
        b'hello'
    """

    def __init__(self, root: Union[str, Path], confine_to_root: bool = True):
        """
        初始化文件存储

        Args:
            root: 存储根目录
            confine_to_root: 是否校验文件名，拒绝逃逸出根目录的路径
        """
        self.root = Path(root)
        self.confine_to_root = confine_to_root
        self._resolver = SecurePathResolver(self.root)

    def ensure_root(self) -> Path:
        """
        确保存储根目录存在（幂等）

        Returns:
            存储根目录路径
        """
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def get_file_path(self, filename: str) -> Path:
        """
        获取文件的物理路径

        Args:
            filename: 文件名

        Returns:
            文件路径

        Raises:
            UnsafeFilenameError: 启用根目录限制且文件名不安全
        """
        if self.confine_to_root:
            return self._resolver.resolve(filename)
        return self.root / filename

    def write(self, filename: str, content: bytes) -> Path:
        """
        写入文件（不存在则创建，存在则完整覆盖）

        Args:
            filename: 文件名
            content: 文件内容

        Returns:
            写入的文件路径

        Raises:
            OSError: 写入失败
            UnsafeFilenameError: 文件名不安全
        """
        file_path = self.get_file_path(filename)
        file_path.write_bytes(content)
        logger.debug(f"文件已写入: {file_path} ({len(content)} bytes)")
        return file_path

    def read(self, filename: str) -> bytes:
        """
        读取文件完整内容

        Raises:
            OSError: 文件不存在或读取失败
            UnsafeFilenameError: 文件名不安全
        """
        return self.get_file_path(filename).read_bytes()

    def delete(self, filename: str) -> None:
        """
        删除文件

        Raises:
            FileNotFoundError: 文件不存在
            OSError: 删除失败
            UnsafeFilenameError: 文件名不安全
        """
        file_path = self.get_file_path(filename)
        file_path.unlink()
        logger.debug(f"文件已删除: {file_path}")

    def list_names(self) -> List[str]:
        """
        列出存储根目录下的所有条目名称

        不递归，不区分文件和子目录，顺序与文件系统枚举顺序一致。

        Returns:
            条目名称列表

        Raises:
            OSError: 根目录不可读
        """
        return os.listdir(self.root)


__all__ = ["FlatFileStore"]
