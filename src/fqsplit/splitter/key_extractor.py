# src/fqsplit/splitter/key_extractor.py
from __future__ import annotations

from typing import Tuple

from fqsplit.config.split_config import SplitConfig
from fqsplit.utils.errors import EmptyReadGroupError, MalformedHeaderError


class ReadGroupExtractor:
    """
    header 行 → read group ID（纯函数，无状态）

    例：
        @INST:1:FC1:3:1101:1000:2000  , delim=":" , keys=(2, 3) , join="."
        -> "FC1.3"
    """

    def __init__(self, config: SplitConfig):
        self.delim = config.header_delim
        self.keys: Tuple[int, ...] = tuple(config.field_keys)
        self.join_char = config.join_char
        self.required = max(self.keys) + 1

    def extract(self, line: str) -> str:
        parts = line.split(self.delim)
        if len(parts) < self.required:
            raise MalformedHeaderError(line, self.required, len(parts))
        key = self.join_char.join(parts[k] for k in self.keys)
        if not key:
            raise EmptyReadGroupError(line)
        return key

    __call__ = extract


def extract(line: str, config: SplitConfig) -> str:
    """extract(line, config) -> read group ID"""
    return ReadGroupExtractor(config).extract(line)
