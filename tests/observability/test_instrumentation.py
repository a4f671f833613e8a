#!filepath: tests/observability/test_instrumentation.py

import time

from loguru import logger

from fqsplit.observability.instrumentation import (
    Instrumentation,
    MetricRecorder,
    NoOpInstrumentation,
)


def test_instrumentation_timer():
    inst = Instrumentation(enabled=True)

    with inst.timer("split_sequential"):
        time.sleep(0.01)

    assert "split_sequential" in inst.timeline
    assert inst.elapsed("split_sequential") > 0
    assert inst.elapsed("missing") == 0.0


def test_timer_records_on_error():
    inst = Instrumentation(enabled=True)

    try:
        with inst.timer("failing"):
            raise RuntimeError("x")
    except RuntimeError:
        pass

    assert "failing" in inst.timeline


def test_disabled_instrumentation():
    inst = Instrumentation(enabled=False)

    with inst.timer("task"):
        pass
    inst.metrics.record("lines", 10)

    assert inst.timeline == {}
    assert inst.metrics.metrics == {}


def test_metric_record():
    m = MetricRecorder(enabled=True)
    m.record("lines", 123)

    assert m.metrics["lines"] == 123


def test_noop_instrumentation():
    inst = NoOpInstrumentation()

    with inst.timer("x"):
        pass
    inst.metrics.record("lines", 1)
    inst.generate_timeline_report("reads.fastq")

    assert inst.elapsed("x") == 0.0
    assert inst.metrics.metrics == {}


def test_generate_timeline_report():
    inst = Instrumentation(enabled=True)

    with inst.timer("split_parallel"):
        time.sleep(0.005)
    inst.metrics.record("read_groups", 2)

    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)))

    inst.generate_timeline_report("reads.fastq")

    logger.remove(sink_id)

    output = "\n".join(captured)

    assert "timeline for reads.fastq" in output
    assert "split_parallel" in output
    assert "read_groups" in output
