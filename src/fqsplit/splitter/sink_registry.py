#!filepath: src/fqsplit/splitter/sink_registry.py
from __future__ import annotations

from typing import Callable, Dict, IO, Iterator, List, Optional

from fqsplit.config.split_config import SplitConfig
from fqsplit.utils.errors import OutputOpenError, WriteError
from fqsplit.utils.filesystem import FileSystem
from fqsplit.utils.logger import logs
from fqsplit.splitter.line_source import ENCODING, ERRORS, NEWLINE


class FileSink:
    """
    一个 read group 对应的带缓冲输出句柄

    - write_line() 自动补 "\\n"
    - close() 先 flush 再关闭，只执行一次
    """

    def __init__(self, path: str, handle: IO[str]):
        self.path = path
        self._handle = handle
        self.lines = 0
        self.closed = False

    def write_line(self, line: str) -> None:
        try:
            self._handle.write(line + "\n")
        except (OSError, ValueError) as e:
            raise WriteError(self.path, str(e)) from e
        self.lines += 1

    def flush(self) -> None:
        try:
            self._handle.flush()
        except (OSError, ValueError) as e:
            raise WriteError(self.path, str(e)) from e

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self._handle.close()  # close() 自带 flush
        except OSError as e:
            raise WriteError(self.path, str(e)) from e


SinkOpener = Callable[[str], FileSink]


def open_file_sink(path: str, buffering: int) -> FileSink:
    """
    创建（或截断）输出文件
    """
    FileSystem.warn_if_exists(path)
    try:
        handle = open(
            path, "w",
            buffering=buffering,
            encoding=ENCODING,
            errors=ERRORS,
            newline=NEWLINE,
        )
    except OSError as e:
        raise OutputOpenError(path, str(e)) from e
    return FileSink(path, handle)


class SinkRegistry:
    """
    read group ID → FileSink

    设计约束：
      - 每个 key 最多创建一个 sink（第一次命中时创建，之后只复用，不重开、不截断）
      - sink 创建后一直保持打开，直到 close_all()
      - 只由 Router 所在线程访问（无锁）
      - close_all() 只执行一次；用 with 保证异常路径也会关闭

    用法：
        with SinkRegistry(config) as registry:
            registry.get_or_create("FC1.3").write_line(line)
    """

    def __init__(self, config: SplitConfig, opener: Optional[SinkOpener] = None):
        self.config = config
        self._opener: SinkOpener = opener or (
            lambda path: open_file_sink(path, config.write_buffer)
        )
        self._sinks: Dict[str, FileSink] = {}
        self._closed = False

    # --------------------------------------------------
    def get_or_create(self, key: str) -> FileSink:
        sink = self._sinks.get(key)
        if sink is not None:
            return sink

        if self._closed:
            raise RuntimeError("SinkRegistry already closed")

        path = self.config.output_name(key)
        sink = self._opener(path)
        self._sinks[key] = sink
        logs.info(f"[SinkRegistry] new read group {key!r} -> {path}")
        return sink

    def close_all(self) -> None:
        """
        flush + close 所有 sink；某个失败不影响其他 sink 的关闭，
        全部尝试完后抛出第一个错误
        """
        if self._closed:
            return
        self._closed = True

        first_error: Optional[BaseException] = None
        for key, sink in self._sinks.items():
            try:
                sink.close()
            except WriteError as e:
                logs.error(f"[SinkRegistry] failed to close {key!r}: {e}")
                if first_error is None:
                    first_error = e

        logs.debug(f"[SinkRegistry] closed {len(self._sinks)} sinks")

        if first_error is not None:
            raise first_error

    # --------------------------------------------------
    def keys(self) -> List[str]:
        return list(self._sinks)

    def paths(self) -> Dict[str, str]:
        return {k: s.path for k, s in self._sinks.items()}

    def line_counts(self) -> Dict[str, int]:
        return {k: s.lines for k, s in self._sinks.items()}

    @property
    def closed(self) -> bool:
        return self._closed

    def __contains__(self, key: str) -> bool:
        return key in self._sinks

    def __len__(self) -> int:
        return len(self._sinks)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sinks)

    def __enter__(self) -> "SinkRegistry":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close_all()
            return

        # 已经在失败路径：尽量关闭，关闭错误只记日志，不覆盖原始异常
        try:
            self.close_all()
        except WriteError as e:
            logs.error(f"[SinkRegistry] best-effort close failed: {e}")
