"""Report formatters.

Each formatter is a pure function ``(ProjectMetrics, Optional[DiffResult]) -> str``.
"""

from enum import Enum
from typing import Callable, Dict, Optional

from ..diff.models import DiffResult
from ..metrics.models import ProjectMetrics
from .csv_formatter import format_csv
from .html_formatter import format_html
from .markdown_formatter import format_markdown
from .pr_comment_formatter import format_pr_comment

Formatter = Callable[[ProjectMetrics, Optional[DiffResult]], str]


class OutputFormat(str, Enum):
    CSV = "csv"
    HTML = "html"
    MARKDOWN = "markdown"
    PR_COMMENT = "pr-comment"


FORMATTERS: Dict[OutputFormat, Formatter] = {
    OutputFormat.CSV: format_csv,
    OutputFormat.HTML: format_html,
    OutputFormat.MARKDOWN: format_markdown,
    OutputFormat.PR_COMMENT: format_pr_comment,
}


def get_formatter(name: str) -> Formatter:
    """Get a formatter by format name.

    Args:
        name: One of "csv", "html", "markdown", "pr-comment"

    Raises:
        ValueError: If name is not recognized
    """
    try:
        return FORMATTERS[OutputFormat(name)]
    except ValueError:
        choices = ", ".join(f.value for f in OutputFormat)
        raise ValueError(f"Unknown format: {name!r}. Choose from: {choices}") from None


def render(
    output_format: OutputFormat, project: ProjectMetrics, diff: Optional[DiffResult] = None
) -> str:
    return FORMATTERS[OutputFormat(output_format)](project, diff)


__all__ = [
    "OutputFormat",
    "FORMATTERS",
    "get_formatter",
    "render",
    "format_csv",
    "format_html",
    "format_markdown",
    "format_pr_comment",
]
