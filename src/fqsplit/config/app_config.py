#!filepath: src/fqsplit/config/app_config.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .log_config import LogConfig
from .split_config import SplitConfig
from fqsplit.utils.errors import UserInputError

CONFIG_ENV_VAR = "FQSPLIT_CONFIG"


def default_config_path() -> Path:
    """
    包内默认配置：src/fqsplit/config/base.yml
    """
    return Path(__file__).resolve().parent / "base.yml"


def _validation_message(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(x) for x in e["loc"])
        parts.append(f"{loc}: {e['msg']}")
    return "; ".join(parts)


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    split: SplitConfig = Field(default_factory=SplitConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 优先级：显式 path > $FQSPLIT_CONFIG > 包内 base.yml
        - .env 从当前工作目录读取（不存在则忽略）
        """
        load_dotenv(Path.cwd() / ".env")

        if path is None:
            path = os.getenv(CONFIG_ENV_VAR) or default_config_path()

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            raise UserInputError(f"Config file {path} must contain a mapping")

        try:
            return cls(**raw)
        except ValidationError as e:
            raise UserInputError(f"Invalid config {path}: {_validation_message(e)}") from None

    def with_split_overrides(self, **overrides: Any) -> "AppConfig":
        """
        CLI 参数覆盖 split 配置（None 表示未指定，保持 YAML 值）
        """
        values: Dict[str, Any] = self.split.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            split = SplitConfig(**values)
        except ValidationError as e:
            raise UserInputError(f"Invalid option: {_validation_message(e)}") from None

        return AppConfig(log=self.log, split=split)

    def with_log_level(self, level: str | None) -> "AppConfig":
        """--log-level 覆盖 YAML 中的 log.level"""
        if not level:
            return self

        try:
            log = LogConfig(**{**self.log.model_dump(), "level": level})
        except ValidationError as e:
            raise UserInputError(f"Invalid option: {_validation_message(e)}") from None

        return AppConfig(log=log, split=self.split)
