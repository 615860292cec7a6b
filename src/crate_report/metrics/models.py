"""Metric records produced by the extractor and folded by the aggregator.

All records are frozen. Project totals are derived from the per-file rows
when a ``ProjectMetrics`` is built and are never set independently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

# Column order of the CSV snapshot format (after ``filename``)
METRIC_FIELDS: tuple[str, ...] = (
    "static_mut_items",
    "total_fns",
    "total_lines",
    "total_statements",
    "unsafe_fns",
    "unsafe_statements",
    "unwraps",
)

# Metrics whose change makes a file worth listing in a diff
SAFETY_FIELDS: tuple[str, ...] = (
    "unsafe_fns",
    "unsafe_statements",
    "static_mut_items",
    "unwraps",
)


@dataclass(frozen=True)
class MetricCounts:
    """The seven integer counters measured for a file or a whole project."""

    static_mut_items: int = 0
    total_fns: int = 0
    total_lines: int = 0
    total_statements: int = 0
    unsafe_fns: int = 0
    unsafe_statements: int = 0
    unwraps: int = 0

    def __add__(self, other: MetricCounts) -> MetricCounts:
        if not isinstance(other, MetricCounts):
            return NotImplemented
        return MetricCounts(**{name: getattr(self, name) + getattr(other, name) for name in METRIC_FIELDS})

    @classmethod
    def sum(cls, items: Iterable[MetricCounts]) -> MetricCounts:
        total = cls()
        for item in items:
            total = total + item
        return total

    def as_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in METRIC_FIELDS}

    def counts(self) -> MetricCounts:
        """Plain counters, without any identity the record may carry."""
        return MetricCounts(**self.as_dict())

    @property
    def is_clean(self) -> bool:
        """No unsafe functions, unsafe statements, static muts or unwraps."""
        return all(getattr(self, name) == 0 for name in SAFETY_FIELDS)


@dataclass(frozen=True)
class FileMetrics(MetricCounts):
    """Counts for a single source file.

    ``path`` is relative to the crate root with ``/`` separators; it is the
    join key between a baseline and the current run.
    """

    path: str = ""


@dataclass(frozen=True)
class ParseFailure:
    """A file that could not be read or parsed."""

    path: str
    message: str


FileResult = Union[FileMetrics, ParseFailure]


@dataclass(frozen=True)
class ProjectMetrics:
    """Ordered per-file metrics plus derived project totals.

    ``files`` keeps discovery order. ``failures`` lists files excluded from
    the totals because they could not be measured.
    """

    files: tuple[FileMetrics, ...] = ()
    failures: tuple[ParseFailure, ...] = ()
    totals: MetricCounts = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(self.files))
        object.__setattr__(self, "failures", tuple(self.failures))
        object.__setattr__(self, "totals", MetricCounts.sum(self.files))

    def with_file(self, result: FileResult) -> ProjectMetrics:
        """Return a new ProjectMetrics with one more file result appended."""
        if isinstance(result, ParseFailure):
            return ProjectMetrics(files=self.files, failures=self.failures + (result,))
        return ProjectMetrics(files=self.files + (result,), failures=self.failures)

    def by_path(self) -> dict[str, FileMetrics]:
        return {f.path: f for f in self.files}

