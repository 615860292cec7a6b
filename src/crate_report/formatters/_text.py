"""Text helpers shared by the report formatters."""

from ..metrics.aggregator import percentage

FOOTER = "Generated by crate-report"

METRIC_LABELS = {
    "unsafe_fns": "Unsafe Functions",
    "unsafe_statements": "Unsafe Statements",
    "static_mut_items": "Static Mut Items",
    "unwraps": "Unwrap Calls",
    "total_fns": "Total Functions",
    "total_statements": "Total Statements",
    "total_lines": "Total Lines",
}


def format_share(part: int, whole: int) -> str:
    """``"33.33% (1/3)"``; an empty whole renders as ``"0% (0/0)"``."""
    return f"{percentage(part, whole)} ({part}/{whole})"


def format_delta(delta: int) -> str:
    return f"{delta:+d}" if delta else "0"


def format_change(before: int, after: int) -> str:
    """``"3 -> 5 (+2)"``, or ``"3 (no change)"`` when equal."""
    if before == after:
        return f"{after} (no change)"
    return f"{before} -> {after} ({format_delta(after - before)})"


def format_ratio_change(
    unsafe_before: int, total_before: int, unsafe_after: int, total_after: int
) -> str:
    """Change of an ``unsafe/total`` pair; the delta is on the unsafe side."""
    if unsafe_before == unsafe_after and total_before == total_after:
        return f"{unsafe_after}/{total_after} (no change)"
    return (
        f"{unsafe_before}/{total_before} -> {unsafe_after}/{total_after} "
        f"({format_delta(unsafe_after - unsafe_before)})"
    )


def markdown_table(headers: list[str], rows: list[list[str]]) -> list[str]:
    """Column-aligned Markdown table; the first column is left aligned."""
    cells = [[_escape_cell(c) for c in row] for row in [headers, *rows]]
    widths = [max(3, *(len(row[i]) for row in cells)) for i in range(len(headers))]

    def line(row: list[str]) -> str:
        padded = [
            row[i].ljust(widths[i]) if i == 0 else row[i].rjust(widths[i])
            for i in range(len(row))
        ]
        return "| " + " | ".join(padded) + " |"

    separator = [
        ":" + "-" * (widths[0] - 1),
        *("-" * (w - 1) + ":" for w in widths[1:]),
    ]
    return [line(cells[0]), "| " + " | ".join(separator) + " |", *(line(r) for r in cells[1:])]


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|")
