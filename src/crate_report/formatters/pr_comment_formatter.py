"""PR comment Markdown, meant to be posted on a pull request by CI.

Only meaningful next to a baseline: without a diff the comment is empty.
"""

from __future__ import annotations

from typing import List, Optional

from ..diff.models import DiffResult, FileChange, Verdict
from ..metrics.models import FileMetrics, ProjectMetrics
from ._text import FOOTER, METRIC_LABELS, format_delta

# Above this many entries the file list is collapsed
MAX_EXPANDED_FILES = 5

SUMMARY_METRICS = ("unsafe_fns", "unsafe_statements", "unwraps", "static_mut_items")

VERDICT_SENTENCES = {
    Verdict.IMPROVEMENT: "Safety improved. This PR reduces unsafe code usage.",
    Verdict.REGRESSION: "Safety regressed. This PR introduces more unsafe code.",
    Verdict.MIXED: "Mixed changes. This PR has both safety improvements and regressions.",
    Verdict.UNCHANGED: "No safety changes. This PR does not change any tracked safety metric.",
}

_ICONS = {
    Verdict.IMPROVEMENT: ":white_check_mark:",
    Verdict.REGRESSION: ":x:",
    Verdict.MIXED: ":warning:",
    Verdict.UNCHANGED: ":heavy_minus_sign:",
}

# Per-file fields, in display order
_FILE_FIELDS = (
    ("unsafe_fns", "unsafe functions"),
    ("unsafe_statements", "unsafe statements"),
    ("static_mut_items", "static mut items"),
    ("unwraps", "unwrap calls"),
)


def format_pr_comment(project: ProjectMetrics, diff: Optional[DiffResult] = None) -> str:
    if diff is None:
        return ""

    lines = [
        "## Safety Analysis Report",
        "",
        "| Metric | Before | After | Change |",
        "|:-------|-------:|------:|-------:|",
    ]
    for name in SUMMARY_METRICS:
        change = diff.metrics[name]
        label = METRIC_LABELS[name]
        if name == "static_mut_items":
            label += " (informational)"
        lines.append(f"| {label} | {change.before} | {change.after} | {format_delta(change.delta)} |")

    lines += ["", f"{_ICONS[diff.verdict]} {VERDICT_SENTENCES[diff.verdict]}"]

    static_delta = diff.delta("static_mut_items")
    if static_delta:
        lines += [
            "",
            f"> Static mut items changed by {format_delta(static_delta)}. "
            "These are not part of the verdict and need a separate review.",
        ]

    entries = [_change_entry(change) for change in diff.files]
    entries += [_removed_entry(metrics) for metrics in diff.removed]
    if entries:
        lines.append("")
        if len(entries) > MAX_EXPANDED_FILES:
            lines += [
                "<details>",
                f"<summary>File changes ({len(entries)})</summary>",
                "",
                *entries,
                "",
                "</details>",
            ]
        else:
            lines += ["### File changes", "", *entries]

    if project.failures:
        count = len(project.failures)
        noun = "file" if count == 1 else "files"
        lines += [
            "",
            f"> {count} {noun} could not be parsed and left out of these numbers:",
        ]
        lines.extend(f"> - `{failure.path}`: {failure.message}" for failure in project.failures)

    lines += ["", "---", f"*{FOOTER}*"]
    return "\n".join(lines) + "\n"


def _change_entry(change: FileChange) -> str:
    new = change.after
    if change.status == "added":
        details = ", ".join(f"{label}: {getattr(new, name)}" for name, label in _FILE_FIELDS)
        return f"- `{change.path}` [NEW]: {details}"

    old = change.before_counts
    parts: List[str] = []
    for name, label in _FILE_FIELDS:
        before, after = getattr(old, name), getattr(new, name)
        if before != after:
            parts.append(f"{label} {before} → {after} ({format_delta(after - before)})")
    return f"- `{change.path}` [MODIFIED]: {', '.join(parts)}"


def _removed_entry(metrics: FileMetrics) -> str:
    details = ", ".join(f"{label}: {getattr(metrics, name)}" for name, label in _FILE_FIELDS)
    return f"- `{metrics.path}` [REMOVED]: had {details}"
