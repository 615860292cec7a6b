"""Aggregation of per-file results into project metrics."""

from __future__ import annotations

from typing import Iterable

from ..logging_config import get_logger
from .models import FileResult, ParseFailure, ProjectMetrics

logger = get_logger(__name__)


def aggregate(results: Iterable[FileResult]) -> ProjectMetrics:
    """Fold per-file results, in the order given, into one ProjectMetrics.

    Failures are kept on the result and left out of the totals.
    """
    files = []
    failures = []
    for result in results:
        if isinstance(result, ParseFailure):
            failures.append(result)
        else:
            files.append(result)

    project = ProjectMetrics(files=tuple(files), failures=tuple(failures))
    if failures:
        logger.info(f"Aggregated {len(files)} files, {len(failures)} failed")
    return project


def percentage(part: int, whole: int) -> str:
    """Render ``part/whole`` as a percentage. A 0/0 ratio renders as ``0%``."""
    if whole == 0:
        return "0%"
    return f"{part * 100 / whole:.2f}%"
