#!filepath: src/fqsplit/utils/filesystem.py
from pathlib import Path

from fqsplit.utils.logger import logs


class FileSystem:
    """
    文件系统小工具
    - 判断输出是否已存在（覆盖前提示）
    - 获取文件大小 / 可读格式
    - 判断 gzip 输入
    """

    GZIP_SUFFIX = ".gz"

    @staticmethod
    def file_exists(path: str | Path) -> bool:
        return Path(path).exists()

    @staticmethod
    def is_gzip(path: str | Path) -> bool:
        return str(path).endswith(FileSystem.GZIP_SUFFIX)

    @staticmethod
    def get_file_size(path: str | Path) -> int:
        """
        返回文件大小（字节），不存在返回 0
        """
        p = Path(path)
        if not p.exists():
            return 0
        return p.stat().st_size

    @staticmethod
    def format_size(size_bytes: float) -> str:
        """
        将字节转换为可读格式（KB / MB / GB）
        """
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if size_bytes < 1024:
                return f"{size_bytes:.2f} {unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f} PB"

    @staticmethod
    def warn_if_exists(path: str | Path) -> bool:
        """
        输出文件已存在时只记 debug：
        创建时照常截断，不做冲突检测
        """
        if FileSystem.file_exists(path):
            logs.debug(f"[FS] 输出文件已存在，将被截断: {path}")
            return True
        return False
