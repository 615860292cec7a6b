"""Markdown report: summary block, per-file table, optional baseline changes."""

from __future__ import annotations

from typing import List, Optional

from ..diff.models import DiffResult, FileChange
from ..metrics.models import FileMetrics, ProjectMetrics
from ._text import FOOTER, format_change, format_ratio_change, format_share, markdown_table

TABLE_HEADERS = ["File", "(unsafe/total) fns", "(unsafe/total) statements", "static mut", "unwrap"]

# Label width for the aligned "label : value" lines of the change summary
_LABEL_WIDTH = 11


def format_markdown(project: ProjectMetrics, diff: Optional[DiffResult] = None) -> str:
    totals = project.totals
    lines = [
        "Code Report",
        "===========",
        "",
        f"- Total lines: {totals.total_lines}",
        f"- Total unsafe functions: {format_share(totals.unsafe_fns, totals.total_fns)}",
        f"- Total statements in unsafe blocks: {totals.unsafe_statements}",
        f"- Total static mut items: {totals.static_mut_items}",
        f"- Total unwrap calls: {totals.unwraps}",
        "",
    ]
    lines.extend(markdown_table(TABLE_HEADERS, [_file_row(f) for f in project.files]))

    if project.failures:
        lines += ["", "Failed files", "------------", ""]
        lines.extend(f"- {failure.path}: {failure.message}" for failure in project.failures)

    if diff is not None:
        lines += ["", "Changes", "-------", "", "```text", *_diff_lines(diff), "```"]

    lines += ["", FOOTER]
    return "\n".join(lines) + "\n"


def _file_row(metrics: FileMetrics) -> List[str]:
    return [
        metrics.path,
        f"{metrics.unsafe_fns}/{metrics.total_fns}",
        f"{metrics.unsafe_statements}/{metrics.total_statements}",
        str(metrics.static_mut_items),
        str(metrics.unwraps),
    ]


def _entry(label: str, value: str, indent: str = "") -> str:
    return f"{indent}{label.ljust(_LABEL_WIDTH)} : {value}"


def _diff_lines(diff: DiffResult) -> List[str]:
    before, after = diff.before, diff.after
    lines = [
        _entry("unsafe fn", format_change(before.unsafe_fns, after.unsafe_fns)),
        _entry("total fn", format_change(before.total_fns, after.total_fns)),
        _entry("unsafe stmt", format_change(before.unsafe_statements, after.unsafe_statements)),
        _entry("total stmt", format_change(before.total_statements, after.total_statements)),
        _entry("static mut", format_change(before.static_mut_items, after.static_mut_items)),
        _entry("unwraps", format_change(before.unwraps, after.unwraps)),
        _entry("verdict", diff.verdict.value),
    ]

    if not diff.has_file_changes:
        return lines + ["", "No changes"]

    for change in diff.files:
        lines += ["", *_file_change_lines(change)]
    for removed in diff.removed:
        lines += [
            "",
            f"{removed.path} [REMOVED]",
            f"  had {removed.unsafe_fns}/{removed.total_fns} unsafe fns, "
            f"{removed.unsafe_statements} unsafe statements, "
            f"{removed.static_mut_items} static mut, {removed.unwraps} unwraps",
        ]
    return lines


def _file_change_lines(change: FileChange) -> List[str]:
    new = change.after
    if change.status == "added":
        return [
            f"{change.path} [NEW FILE]",
            _entry("unsafe fn", f"{new.unsafe_fns}/{new.total_fns}", "  "),
            _entry("unsafe stmt", str(new.unsafe_statements), "  "),
            _entry("static mut", str(new.static_mut_items), "  "),
            _entry("unwraps", str(new.unwraps), "  "),
        ]

    old = change.before_counts
    return [
        change.path,
        _entry(
            "unsafe fn",
            format_ratio_change(old.unsafe_fns, old.total_fns, new.unsafe_fns, new.total_fns),
            "  ",
        ),
        _entry("unsafe stmt", format_change(old.unsafe_statements, new.unsafe_statements), "  "),
        _entry("static mut", format_change(old.static_mut_items, new.static_mut_items), "  "),
        _entry("unwraps", format_change(old.unwraps, new.unwraps), "  "),
    ]
