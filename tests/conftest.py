# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import pytest
from loguru import logger

from fqsplit.config.split_config import SplitConfig


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield
    logger.remove()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    """
    输出文件写在 cwd：每个测试使用独立的临时目录
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def config() -> SplitConfig:
    return SplitConfig()


def make_record(flowcell: str, lane: str, n: int) -> List[str]:
    return [
        f"@INST:1:{flowcell}:{lane}:1101:{1000 + n}:{2000 + n} 1:N:0:ACGT",
        "ACGTACGTAC",
        "+",
        "IIIIIIIIII",
    ]


@pytest.fixture
def two_group_lines() -> List[str]:
    """
    FC1.3 / FC2.5 交替出现的 6 条 read（24 行）
    """
    lines: List[str] = []
    for i in range(6):
        if i % 2 == 0:
            lines += make_record("FC1", "3", i)
        else:
            lines += make_record("FC2", "5", i)
    return lines


@pytest.fixture
def read_outputs():
    """
    读取目录下所有输出文件：{文件名: 内容}
    """

    def _read(directory: Path, suffix: str = ".fastq") -> Dict[str, str]:
        return {
            p.name: p.read_text(encoding="utf-8")
            for p in sorted(directory.glob(f"*{suffix}"))
        }

    return _read
