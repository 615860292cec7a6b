"""Data models for baseline diffing: metric deltas, file changes, verdict."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from ..metrics.models import FileMetrics, MetricCounts


class Verdict(Enum):
    """Qualitative classification of a baseline-to-current change."""

    IMPROVEMENT = "improvement"
    REGRESSION = "regression"
    MIXED = "mixed"
    UNCHANGED = "unchanged"

    @property
    def is_failure(self) -> bool:
        """Whether CI gating should fail on this verdict."""
        return self in (Verdict.REGRESSION, Verdict.MIXED)


@dataclass(frozen=True)
class MetricChange:
    """Change in a single project-wide metric."""

    before: int
    after: int

    @property
    def delta(self) -> int:
        return self.after - self.before


@dataclass(frozen=True)
class FileChange:
    """A file whose safety metrics differ from the baseline.

    ``status`` is ``"added"`` (not in the baseline, before counts as zero) or
    ``"changed"``.
    """

    path: str
    status: str
    after: FileMetrics
    before: Optional[FileMetrics] = None

    @property
    def before_counts(self) -> MetricCounts:
        return self.before.counts() if self.before is not None else MetricCounts()


@dataclass(frozen=True)
class DiffResult:
    """Complete comparison between a baseline and the current run.

    ``files`` holds added and changed files in path order. Files that exist
    only in the baseline are listed in ``removed``; their counts remain in the
    ``before`` side of ``metrics``.
    """

    metrics: Dict[str, MetricChange]
    verdict: Verdict
    files: Tuple[FileChange, ...] = ()
    removed: Tuple[FileMetrics, ...] = ()

    @property
    def before(self) -> MetricCounts:
        return MetricCounts(**{name: change.before for name, change in self.metrics.items()})

    @property
    def after(self) -> MetricCounts:
        return MetricCounts(**{name: change.after for name, change in self.metrics.items()})

    def delta(self, name: str) -> int:
        return self.metrics[name].delta

    @property
    def has_file_changes(self) -> bool:
        return bool(self.files or self.removed)
