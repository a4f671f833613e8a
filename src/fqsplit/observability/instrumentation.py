#!filepath: src/fqsplit/observability/instrumentation.py
from __future__ import annotations

import time
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict

from fqsplit.utils.logger import logs


@dataclass
class MetricRecorder:
    enabled: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict)

    def record(self, name: str, value: Any):
        if not self.enabled:
            return
        self.metrics[name] = value
        logs.debug(f"[Metric] {name} = {value}")


@dataclass
class Instrumentation:
    """
    运行期可观测性：
      - timer(name)：上下文计时，写入 timeline
      - metrics：行数 / record 数 / read group 数
      - timeline 报告只在冷路径（运行结束）输出

    热路径（逐行）不做任何记录。
    """

    enabled: bool = True

    def __post_init__(self):
        self.metrics = MetricRecorder(enabled=self.enabled)
        self.timeline: Dict[str, float] = OrderedDict()

    @contextmanager
    def timer(self, name: str):
        if not self.enabled:
            yield
            return

        start = time.perf_counter()
        try:
            yield
        finally:
            self.timeline[name] = time.perf_counter() - start

    def elapsed(self, name: str) -> float:
        return self.timeline.get(name, 0.0)

    def generate_timeline_report(self, label: str):
        if not self.enabled:
            return

        logs.info(f"[Timeline] ===== timeline for {label} =====")

        total = 0.0
        for name, sec in self.timeline.items():
            logs.info(f"[Timeline] {name:<30} {sec:>8.3f}s")
            total += sec

        for name, value in self.metrics.metrics.items():
            logs.info(f"[Timeline] {name:<30} {value:>9}")

        logs.info(f"[Timeline] Total{'':<27} {total:>8.3f}s")


class NoOpInstrumentation:
    """Instrumentation 关闭时使用"""

    enabled = False

    def __init__(self):
        self.metrics = MetricRecorder(enabled=False)
        self.timeline: Dict[str, float] = {}

    @contextmanager
    def timer(self, name: str):
        yield

    def elapsed(self, name: str) -> float:
        return 0.0

    def generate_timeline_report(self, label: str):
        pass
