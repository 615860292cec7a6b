"""Self-contained HTML report with inline styles and no external assets."""

from __future__ import annotations

from html import escape
from typing import List, Optional

from ..diff.models import DiffResult
from ..metrics.models import FileMetrics, ProjectMetrics
from ._text import FOOTER, format_change, format_share

_STYLE = """
body { font-family: -apple-system, "Segoe UI", Helvetica, Arial, sans-serif;
       margin: 2rem; color: #24292e; background: #f6f8fa; }
.container { max-width: 1100px; margin: 0 auto; background: #fff; padding: 2rem;
             border-radius: 8px; box-shadow: 0 1px 3px rgba(0, 0, 0, 0.1); }
.cards { display: flex; flex-wrap: wrap; gap: 1rem; margin-bottom: 2rem; }
.card { flex: 1 1 180px; padding: 1rem; border-radius: 6px; background: #f1f3f5; }
.card .value { font-size: 1.6rem; font-weight: bold; }
table { width: 100%; border-collapse: collapse; }
th, td { padding: 0.4rem 0.6rem; border-bottom: 1px solid #e1e4e8; text-align: right; }
th:first-child, td:first-child { text-align: left; font-family: monospace; }
.safe { color: #1a7f37; }
.warning { color: #9a6700; }
.danger { color: #cf222e; }
.neutral { color: #57606a; }
tr.clean td:first-child { color: #1a7f37; }
.added { border-left: 4px solid #1a7f37; }
.changed { border-left: 4px solid #9a6700; }
.removed { border-left: 4px solid #cf222e; }
.diff-entry { padding: 0.5rem 1rem; margin: 0.5rem 0; background: #f6f8fa; }
footer { margin-top: 2rem; color: #57606a; font-size: 0.9rem; }
"""


def safety_class(unsafe_count: int, total_count: int) -> str:
    """CSS class for an unsafe/total pair."""
    if total_count == 0:
        return "neutral"
    if unsafe_count == 0:
        return "safe"
    if unsafe_count / total_count < 0.5:
        return "warning"
    return "danger"


def count_class(count: int) -> str:
    """CSS class for a plain count where zero is best."""
    if count == 0:
        return "safe"
    if count < 10:
        return "warning"
    return "danger"


def format_html(project: ProjectMetrics, diff: Optional[DiffResult] = None) -> str:
    totals = project.totals
    parts = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        "<title>Code Report</title>",
        f"<style>{_STYLE}</style>",
        "</head>",
        "<body>",
        '<div class="container">',
        "<h1>Code Report</h1>",
        '<div class="cards">',
        _card("Total lines", str(totals.total_lines), "neutral"),
        _card(
            "Unsafe functions",
            format_share(totals.unsafe_fns, totals.total_fns),
            safety_class(totals.unsafe_fns, totals.total_fns),
        ),
        _card(
            "Statements in unsafe blocks",
            f"{totals.unsafe_statements}/{totals.total_statements}",
            safety_class(totals.unsafe_statements, totals.total_statements),
        ),
        _card("Static mut items", str(totals.static_mut_items), count_class(totals.static_mut_items)),
        _card("Unwrap calls", str(totals.unwraps), count_class(totals.unwraps)),
        "</div>",
        *_file_table(project.files),
    ]

    if project.failures:
        parts += ["<h2>Failed files</h2>", "<ul>"]
        parts.extend(
            f"<li><code>{escape(f.path)}</code>: {escape(f.message)}</li>" for f in project.failures
        )
        parts.append("</ul>")

    if diff is not None:
        parts.extend(_diff_section(diff))

    parts += [f"<footer>{escape(FOOTER)}</footer>", "</div>", "</body>", "</html>"]
    return "\n".join(parts) + "\n"


def _card(label: str, value: str, css_class: str) -> str:
    return (
        f'<div class="card"><div>{escape(label)}</div>'
        f'<div class="value {css_class}">{escape(value)}</div></div>'
    )


def _file_table(files: tuple[FileMetrics, ...]) -> List[str]:
    rows = [
        "<h2>Files</h2>",
        "<table>",
        "<thead><tr><th>File</th><th>Unsafe/Total fns</th><th>Unsafe/Total statements</th>"
        "<th>Static mut</th><th>Unwraps</th></tr></thead>",
        "<tbody>",
    ]
    for f in files:
        row_class = ' class="clean"' if f.is_clean else ""
        rows.append(
            f"<tr{row_class}>"
            f"<td>{escape(f.path)}</td>"
            f'<td class="{safety_class(f.unsafe_fns, f.total_fns)}">{f.unsafe_fns}/{f.total_fns}</td>'
            f'<td class="{safety_class(f.unsafe_statements, f.total_statements)}">'
            f"{f.unsafe_statements}/{f.total_statements}</td>"
            f'<td class="{count_class(f.static_mut_items)}">{f.static_mut_items}</td>'
            f'<td class="{count_class(f.unwraps)}">{f.unwraps}</td>'
            "</tr>"
        )
    rows += ["</tbody>", "</table>"]
    return rows


def _diff_section(diff: DiffResult) -> List[str]:
    parts = [
        "<h2>Changes from baseline</h2>",
        f"<p>Verdict: <strong>{escape(diff.verdict.value)}</strong></p>",
        "<table>",
        "<thead><tr><th>Metric</th><th>Change</th></tr></thead>",
        "<tbody>",
    ]
    for label, name in (
        ("Unsafe functions", "unsafe_fns"),
        ("Unsafe statements", "unsafe_statements"),
        ("Static mut items", "static_mut_items"),
        ("Unwrap calls", "unwraps"),
    ):
        change = diff.metrics[name]
        parts.append(
            f"<tr><td>{label}</td><td>{escape(format_change(change.before, change.after))}</td></tr>"
        )
    parts += ["</tbody>", "</table>"]

    if not diff.has_file_changes:
        parts.append("<p>No changes</p>")
        return parts

    for change in diff.files:
        new, old = change.after, change.before_counts
        if change.status == "added":
            body = (
                f"Unsafe functions: {new.unsafe_fns}, unsafe statements: {new.unsafe_statements}, "
                f"static mut items: {new.static_mut_items}, unwraps: {new.unwraps}"
            )
            parts.append(_diff_entry("added", f"{change.path} [NEW FILE]", body))
        else:
            body = "<br>".join(
                escape(f"{label}: {format_change(getattr(old, name), getattr(new, name))}")
                for label, name in (
                    ("Unsafe functions", "unsafe_fns"),
                    ("Unsafe statements", "unsafe_statements"),
                    ("Static mut items", "static_mut_items"),
                    ("Unwraps", "unwraps"),
                )
            )
            parts.append(_diff_entry("changed", f"{change.path} [MODIFIED]", body, escaped=True))

    for removed in diff.removed:
        body = (
            f"Had {removed.unsafe_fns} unsafe functions, {removed.unsafe_statements} unsafe "
            f"statements, {removed.static_mut_items} static mut items, {removed.unwraps} unwraps"
        )
        parts.append(_diff_entry("removed", f"{removed.path} [REMOVED]", body))
    return parts


def _diff_entry(css_class: str, title: str, body: str, escaped: bool = False) -> str:
    content = body if escaped else escape(body)
    return (
        f'<div class="diff-entry {css_class}"><strong>{escape(title)}</strong><br>{content}</div>'
    )
