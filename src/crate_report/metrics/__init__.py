"""Per-file metric extraction and project aggregation."""

from .aggregator import aggregate, percentage
from .extractor import MetricExtractor, count_lines, extract_metrics
from .models import (
    METRIC_FIELDS,
    SAFETY_FIELDS,
    FileMetrics,
    FileResult,
    MetricCounts,
    ParseFailure,
    ProjectMetrics,
)

__all__ = [
    "aggregate",
    "percentage",
    "MetricExtractor",
    "count_lines",
    "extract_metrics",
    "METRIC_FIELDS",
    "SAFETY_FIELDS",
    "FileMetrics",
    "FileResult",
    "MetricCounts",
    "ParseFailure",
    "ProjectMetrics",
]
