#!filepath: src/fqsplit/splitter/router.py
from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from fqsplit.config.split_config import SplitConfig
from fqsplit.splitter.key_extractor import ReadGroupExtractor
from fqsplit.splitter.sink_registry import FileSink, SinkRegistry
from fqsplit.utils.errors import RoutingBeforeHeaderError


class RouterState(str, Enum):
    AWAITING_FIRST_HEADER = "awaiting_first_header"
    ROUTING = "routing"


class Router:
    """
    逐行路由（有状态）

    - header 行（以 header_prefix 开头）：提取 read group，取 / 建 sink，更新 current_key
    - 其他行：写入 current_key 对应的 sink
    - 第一行必须是 header，否则直接报错（没有 key 可以路由）

    Router 不负责关闭 sink：由持有 SinkRegistry 的一方在 with 作用域里关闭
    """

    def __init__(self, config: SplitConfig, registry: SinkRegistry):
        self.config = config
        self.registry = registry
        self.extractor = ReadGroupExtractor(config)

        self.state = RouterState.AWAITING_FIRST_HEADER
        self.current_key: Optional[str] = None
        self._sink: Optional[FileSink] = None

        self.lines = 0
        self.records = 0

    # --------------------------------------------------
    def route(self, line: str) -> str:
        """
        路由一行，返回该行写入的 read group ID
        """
        if line.startswith(self.config.header_prefix):
            key = self.extractor.extract(line)
            if key != self.current_key:
                self._sink = self.registry.get_or_create(key)
                self.current_key = key
            self.state = RouterState.ROUTING
            self.records += 1
        elif self.state is RouterState.AWAITING_FIRST_HEADER:
            raise RoutingBeforeHeaderError(line)

        self._sink.write_line(line)
        self.lines += 1
        return self.current_key

    def route_all(self, lines: Iterable[str]) -> int:
        """
        路由整个序列，返回本次路由的行数
        """
        route = self.route
        n = 0
        for line in lines:
            route(line)
            n += 1
        return n
