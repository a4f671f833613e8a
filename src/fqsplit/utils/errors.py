# src/fqsplit/utils/errors.py
from __future__ import annotations

from pathlib import Path


class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided config (field keys, delimiters, etc).
    Should NOT print traceback.
    """


class SplitError(RuntimeError):
    """
    所有致命错误的基类：任何一个都终止整次运行，不重试、不跳过。
    """

    kind: str = "split"


class InputOpenError(SplitError):
    kind = "input-open"

    def __init__(self, source: str, reason: str):
        self.source = source
        super().__init__(f"Error opening input {source}: {reason}")


class ReadError(SplitError):
    kind = "read"

    def __init__(self, source: str, reason: str):
        self.source = source
        super().__init__(f"Error while trying to read {source}: {reason}")


class MalformedHeaderError(SplitError):
    kind = "malformed-header"

    def __init__(self, line: str, required: int, found: int):
        self.line = line
        self.required = required
        self.found = found
        super().__init__(
            f"Error extracting read group ID from line "
            f"(need {required} fields, found {found}):\n{line}"
        )


class EmptyReadGroupError(SplitError):
    """选中的字段拼接后为空：没有可用的 read group"""

    kind = "empty-read-group"

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"Error extracting read group ID from line (empty ID):\n{line}")


class RoutingBeforeHeaderError(SplitError):
    kind = "routing-before-header"

    def __init__(self, line: str):
        self.line = line
        super().__init__(
            f"Line appeared before any header line, no read group to route it to:\n{line}"
        )


class OutputOpenError(SplitError):
    kind = "output-open"

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        super().__init__(f"Error creating output file {self.path}: {reason}")


class WriteError(SplitError):
    kind = "write"

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        super().__init__(f"Error writing to file {self.path}: {reason}")
