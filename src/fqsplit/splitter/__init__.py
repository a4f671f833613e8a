from .key_extractor import ReadGroupExtractor, extract
from .line_source import LineSource
from .pipeline import PipelineCoordinator
from .router import Router, RouterState
from .runner import SplitResult, run_split, split_lines
from .sink_registry import FileSink, SinkRegistry

__all__ = [
    "ReadGroupExtractor", "extract",
    "LineSource",
    "PipelineCoordinator",
    "Router", "RouterState",
    "SplitResult", "run_split", "split_lines",
    "FileSink", "SinkRegistry",
]
