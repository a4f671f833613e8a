#!filepath: src/fqsplit/splitter/runner.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Dict, Iterable, Optional

from fqsplit.config.split_config import SplitConfig
from fqsplit.observability.instrumentation import Instrumentation, NoOpInstrumentation
from fqsplit.splitter.line_source import LineSource
from fqsplit.splitter.pipeline import PipelineCoordinator
from fqsplit.splitter.router import Router
from fqsplit.splitter.sink_registry import SinkOpener, SinkRegistry
from fqsplit.utils.logger import logs

SEQUENTIAL = "sequential"
PARALLEL = "parallel"


@dataclass
class SplitResult:
    """
    一次拆分的汇总（冷路径，只在结束时构造）
    """

    mode: str
    lines: int = 0
    records: int = 0
    groups: Dict[str, int] = field(default_factory=dict)  # read group -> 行数
    outputs: Dict[str, str] = field(default_factory=dict)  # read group -> 输出文件名
    elapsed: float = 0.0


def _route(lines: Iterable[str], router: Router, config: SplitConfig) -> None:
    if config.parallel:
        PipelineCoordinator(config).run(lines, router)
    else:
        router.route_all(lines)


def split_lines(
    lines: Iterable[str],
    config: SplitConfig,
    opener: Optional[SinkOpener] = None,
) -> SplitResult:
    """
    对任意行序列执行拆分（不负责打开输入）

    config.parallel 决定走顺序模式还是读线程模式；
    任何致命错误都会向上抛出，已打开的 sink 尽量 flush + close
    """
    mode = PARALLEL if config.parallel else SEQUENTIAL

    with SinkRegistry(config, opener) as registry:
        router = Router(config, registry)
        _route(lines, router, config)
        # 正常结束：关闭所有输出（with 退出时不再重复关闭）
        registry.close_all()

    return SplitResult(
        mode=mode,
        lines=router.lines,
        records=router.records,
        groups=registry.line_counts(),
        outputs=registry.paths(),
    )


@logs.catch(msg="split aborted")
def run_split(
    input_path: str | Path | None,
    config: SplitConfig,
    inst: Optional[Instrumentation] = None,
    stdin: Optional[IO[bytes]] = None,
    opener: Optional[SinkOpener] = None,
) -> SplitResult:
    """
    打开输入（文件 / .gz / stdin）并拆分
    """
    inst = inst if inst is not None else NoOpInstrumentation()
    mode = PARALLEL if config.parallel else SEQUENTIAL
    timer_name = f"split_{mode}"

    logs.info(
        f"[Runner] start mode={mode} keys={list(config.field_keys)} "
        f"delim={config.header_delim!r} join={config.join_char!r}"
    )

    with inst.timer(timer_name):
        with LineSource.open(input_path, stdin=stdin) as source:
            result = split_lines(source, config, opener=opener)

    result.elapsed = inst.elapsed(timer_name)

    inst.metrics.record("lines", result.lines)
    inst.metrics.record("records", result.records)
    inst.metrics.record("read_groups", len(result.groups))

    logs.info(
        f"[Runner] done lines={result.lines} records={result.records} "
        f"read_groups={len(result.groups)}"
    )
    return result
