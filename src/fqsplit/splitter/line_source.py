#!filepath: src/fqsplit/splitter/line_source.py
from __future__ import annotations

import gzip
import io
import sys
import zlib
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Optional

from fqsplit.utils.errors import InputOpenError, ReadError
from fqsplit.utils.filesystem import FileSystem
from fqsplit.utils.logger import logs

ENCODING = "utf-8"
ERRORS = "surrogateescape"  # 任意字节原样写回输出
NEWLINE = "\n"  # 只按 \n 切行，不做 universal newline 转换

STDIN_NAMES = (None, "-")

# gzip 在迭代过程中可能抛出的异常
_READ_ERRORS = (OSError, EOFError, zlib.error)


def strip_newline(line: str) -> str:
    """去掉行尾 \\n 以及紧挨着的一个 \\r"""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


class LineSource:
    """
    只负责把字节流变成逐行 str（去掉换行符）

    - 文件 / stdin / .gz
    - 单向、不可重启
    - 打开的句柄由 open() 的 with 作用域负责释放（包括异常路径）
    """

    def __init__(self, handle: IO[str], name: str):
        self._handle = handle
        self.name = name
        self.lines_read = 0

    # --------------------------------------------------
    @classmethod
    @contextmanager
    def open(cls, path: str | Path | None = None, stdin: Optional[IO[bytes]] = None):
        """
        with LineSource.open(path) as source:
            for line in source:
                ...

        path 为 None 或 "-" 时读 stdin（stdin 本身不会被关闭）
        """
        if path in STDIN_NAMES:
            raw = stdin if stdin is not None else sys.stdin.buffer
            handle = io.TextIOWrapper(raw, encoding=ENCODING, errors=ERRORS, newline=NEWLINE)
            logs.info("[LineSource] reading from stdin")
            try:
                yield cls(handle, "<stdin>")
            finally:
                # detach：只释放 wrapper
                handle.detach()
            return

        name = str(path)
        handle = cls._open_file(name)
        logs.info(f"[LineSource] reading from {name}")
        try:
            yield cls(handle, name)
        finally:
            handle.close()

    @staticmethod
    def _open_file(name: str) -> IO[str]:
        try:
            if not FileSystem.is_gzip(name):
                return open(name, "r", encoding=ENCODING, errors=ERRORS, newline=NEWLINE)

            handle = gzip.open(name, "rt", encoding=ENCODING, errors=ERRORS, newline=NEWLINE)
        except _READ_ERRORS as e:
            raise InputOpenError(name, str(e)) from e

        # 先读 gzip header：不是 gzip 的文件在打开阶段就报错
        try:
            handle.buffer.peek(1)
        except _READ_ERRORS as e:
            handle.close()
            raise InputOpenError(name, str(e)) from e
        return handle

    # --------------------------------------------------
    def __iter__(self) -> Iterator[str]:
        readline = self._handle.readline
        while True:
            try:
                line = readline()
            except _READ_ERRORS as e:
                raise ReadError(self.name, str(e)) from e

            if not line:
                return

            self.lines_read += 1
            yield strip_newline(line)
