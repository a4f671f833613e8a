# src/fqsplit/config/split_config.py
from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from fqsplit.utils.errors import UserInputError


class SplitConfig(BaseModel):
    """
    一次运行的全部拆分参数（构造后不可变）

    header_prefix : header 行的起始标记（FASTQ 为 "@"）
    header_delim  : header 字段分隔符
    field_keys    : 组成 read group 的字段下标（0-based，按顺序拼接）
    join_char     : 拼接字段用的连接符
    file_prefix / file_suffix : 输出文件名 = prefix + key + suffix
    parallel      : 是否启用读线程 + 有界队列
    buffer_size   : 有界队列容量（行数），仅 parallel 时有意义
    write_buffer  : 每个输出文件的写缓冲（字节）
    """

    model_config = ConfigDict(frozen=True)

    header_prefix: str = "@"
    header_delim: str = ":"
    field_keys: Tuple[int, ...] = (2, 3)
    join_char: str = "."
    file_prefix: str = ""
    file_suffix: str = ".fastq"
    parallel: bool = False
    buffer_size: int = 10000
    write_buffer: int = 1024 * 1024

    @field_validator("header_prefix", "header_delim")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("field_keys", mode="before")
    @classmethod
    def _coerce_field_keys(cls, v):
        if isinstance(v, str):
            return cls.parse_field_keys(v)
        return v

    @field_validator("field_keys")
    @classmethod
    def _check_field_keys(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        if not v:
            raise ValueError("at least one field key is required")
        if any(k < 0 for k in v):
            raise ValueError(f"field keys must be >= 0, got {list(v)}")
        return v

    @field_validator("buffer_size", "write_buffer")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be >= 1, got {v}")
        return v

    # --------------------------------------------------
    @staticmethod
    def parse_field_keys(raw: str) -> Tuple[int, ...]:
        """
        "2,3" -> (2, 3)
        """
        keys = []
        for token in raw.split(","):
            token = token.strip()
            try:
                keys.append(int(token))
            except ValueError:
                raise UserInputError(
                    f"Error while trying to parse key value: {token!r}"
                ) from None
        return tuple(keys)

    @property
    def required_fields(self) -> int:
        """header 至少需要的字段数"""
        return max(self.field_keys) + 1

    def output_name(self, key: str) -> str:
        return f"{self.file_prefix}{key}{self.file_suffix}"
