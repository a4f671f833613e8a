#!filepath: src/fqsplit/config/log_config.py
from typing import Optional

from pydantic import BaseModel, field_validator

# loguru 内置的级别名
LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class LogConfig(BaseModel):
    dir: Optional[str] = None
    rotation: str = "1 day"
    retention: str = "30 days"
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LEVELS:
            raise ValueError(f"unknown log level {v!r}, expected one of {', '.join(LEVELS)}")
        return level
