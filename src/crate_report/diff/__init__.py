"""Baseline comparison and verdict classification."""

from .engine import TRACKED_METRICS, classify, compare
from .models import DiffResult, FileChange, MetricChange, Verdict

__all__ = [
    "TRACKED_METRICS",
    "classify",
    "compare",
    "DiffResult",
    "FileChange",
    "MetricChange",
    "Verdict",
]
