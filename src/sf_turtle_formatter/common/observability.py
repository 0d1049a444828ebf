"""Prometheus 指标。"""
from __future__ import annotations

from prometheus_client import Counter, Histogram

RENDER_SECONDS = Histogram(
    "turtle_formatter_render_seconds",
    "Time spent rendering one graph to Turtle",
)
SUBJECTS_TOTAL = Counter(
    "turtle_formatter_subjects_total",
    "Top-level statement blocks written",
)
LABELED_BLANK_NODES_TOTAL = Counter(
    "turtle_formatter_labeled_blank_nodes_total",
    "Blank nodes that required a stable label",
)
WRITE_FAILURES_TOTAL = Counter(
    "turtle_formatter_write_failures_total",
    "Output sink write failures",
    ["sink"],
)


def observe_render(duration_seconds: float, subjects: int, labeled: int) -> None:
    """记录一次渲染的耗时与规模。"""

    RENDER_SECONDS.observe(duration_seconds)
    SUBJECTS_TOTAL.inc(subjects)
    LABELED_BLANK_NODES_TOTAL.inc(labeled)


def observe_write_failure(sink: str) -> None:
    """记录一次输出失败。"""

    WRITE_FAILURES_TOTAL.labels(sink=sink).inc()
