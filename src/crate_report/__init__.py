"""
crate-report - unsafe code metrics for Rust crates

Counts unsafe functions, statements inside unsafe blocks, static mut items
and unwrap calls per source file, compares a run against a CSV baseline,
and renders the result as Markdown, HTML, CSV or a pull request comment.
"""

__version__ = "0.1.0"

from .analysis import analyze_crate
from .baseline import load_baseline, parse_baseline, to_csv
from .diff import DiffResult, Verdict, compare
from .metrics import FileMetrics, MetricCounts, ParseFailure, ProjectMetrics

__all__ = [
    "analyze_crate",  # Main entry point
    "compare",
    "load_baseline",
    "parse_baseline",
    "to_csv",
    "DiffResult",
    "Verdict",
    "FileMetrics",
    "MetricCounts",
    "ParseFailure",
    "ProjectMetrics",
]
