"""Diff engine: compares two ProjectMetrics and classifies the change.

Only three metrics drive the verdict: unsafe functions, unsafe statements
and unwrap calls. ``static mut`` deltas are reported alongside but left out
of the vote; a single static item is rare and severe, so it is called out
on its own instead.
"""

from typing import Dict, Iterable, List

from ..metrics.models import METRIC_FIELDS, SAFETY_FIELDS, FileMetrics, ProjectMetrics
from .models import DiffResult, FileChange, MetricChange, Verdict

TRACKED_METRICS = ("unsafe_fns", "unsafe_statements", "unwraps")


def classify(deltas: Iterable[int]) -> Verdict:
    """Classify the deltas of the tracked metrics.

    A negative delta means fewer unsafe constructs.
    """
    deltas = list(deltas)
    improved = sum(1 for d in deltas if d < 0)
    regressed = sum(1 for d in deltas if d > 0)

    if improved == 0 and regressed == 0:
        return Verdict.UNCHANGED
    if regressed == 0:
        return Verdict.IMPROVEMENT
    if improved == 0:
        return Verdict.REGRESSION
    return Verdict.MIXED


def _should_report(before: FileMetrics, after: FileMetrics) -> bool:
    return any(getattr(before, name) != getattr(after, name) for name in SAFETY_FIELDS)


def _file_changes(before: ProjectMetrics, after: ProjectMetrics) -> List[FileChange]:
    old = before.by_path()
    new = after.by_path()

    changes: List[FileChange] = []
    for path in sorted(new):
        current = new[path]
        previous = old.get(path)
        if previous is None:
            changes.append(FileChange(path=path, status="added", after=current))
        elif _should_report(previous, current):
            changes.append(FileChange(path=path, status="changed", after=current, before=previous))
    return changes


def compare(before: ProjectMetrics, after: ProjectMetrics) -> DiffResult:
    """Compare a baseline (``before``) with the current run (``after``)."""
    metrics: Dict[str, MetricChange] = {
        name: MetricChange(before=getattr(before.totals, name), after=getattr(after.totals, name))
        for name in METRIC_FIELDS
    }
    verdict = classify(metrics[name].delta for name in TRACKED_METRICS)

    current_paths = {f.path for f in after.files}
    removed = tuple(
        sorted((f for f in before.files if f.path not in current_paths), key=lambda f: f.path)
    )

    return DiffResult(
        metrics=metrics,
        verdict=verdict,
        files=tuple(_file_changes(before, after)),
        removed=removed,
    )
