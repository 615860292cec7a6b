"""CSV formatter: the per-file snapshot, reusable as a future baseline."""

from __future__ import annotations

from typing import Optional

from ..baseline import to_csv
from ..diff.models import DiffResult
from ..metrics.models import ProjectMetrics


def format_csv(project: ProjectMetrics, diff: Optional[DiffResult] = None) -> str:
    # A diff does not change the snapshot
    return to_csv(project)
