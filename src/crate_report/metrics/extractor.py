"""Metric extraction: one Rust file in, one FileMetrics (or ParseFailure) out.

Counting policy:

- Functions: only ``function_item`` nodes, which always carry a body.
  Bodiless trait signatures and extern declarations are not functions.
  Closures are not functions; their statements belong to the enclosing
  function.
- Unsafe functions: functions whose modifiers include ``unsafe``.
- Statements: the statements of every block that lies inside a function
  body, trailing expression included. A block used as a statement is one
  statement of its parent block; its own statements are counted separately.
- Unsafe statements: statements whose parent block is an unsafe block or the
  body of an unsafe function. A plain block nested in unsafe code is safe
  again.
- ``static mut`` items: one per declaration, anywhere in the file.
- Unwraps: calls whose invoked name is ``unwrap``. There is no type
  resolution, so any method called ``unwrap`` counts.

Macro invocations are token trees to tree-sitter, so nothing inside a macro
call is counted.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..exceptions import ParsingError
from ..logging_config import get_logger
from ..scanning.nodes import (
    block_statements,
    called_name,
    has_body,
    is_mutable_static,
    is_unsafe_function,
    is_unsafe_scope,
)
from ..scanning.scanner import relative_key
from ..scanning.treesitter_parser import RustParser, Tree
from .models import FileMetrics, FileResult, ParseFailure

logger = get_logger(__name__)

UNWRAP = "unwrap"


def count_lines(source: str) -> int:
    """Physical line count: ``"a\\nb"`` and ``"a\\nb\\n"`` both have 2 lines."""
    if not source:
        return 0
    newlines = source.count("\n")
    return newlines if source.endswith("\n") else newlines + 1


def extract_metrics(tree: Tree, path: str, source: str) -> FileMetrics:
    """Walk a parsed tree and count every metric for one file."""
    total_fns = unsafe_fns = 0
    total_statements = unsafe_statements = 0
    static_mut_items = unwraps = 0

    # (node, inside a function body)
    stack = [(tree.root_node, False)]
    while stack:
        node, in_function = stack.pop()
        kind = node.type

        if kind == "function_item" and has_body(node):
            total_fns += 1
            if is_unsafe_function(node):
                unsafe_fns += 1
            in_function = True
        elif kind == "block" and in_function:
            statements = len(block_statements(node))
            total_statements += statements
            if is_unsafe_scope(node):
                unsafe_statements += statements
        elif kind == "static_item" and is_mutable_static(node):
            static_mut_items += 1
        elif kind == "call_expression" and called_name(node) == UNWRAP:
            unwraps += 1

        stack.extend((child, in_function) for child in node.named_children)

    return FileMetrics(
        path=path,
        static_mut_items=static_mut_items,
        total_fns=total_fns,
        total_lines=count_lines(source),
        total_statements=total_statements,
        unsafe_fns=unsafe_fns,
        unsafe_statements=unsafe_statements,
        unwraps=unwraps,
    )


class MetricExtractor:
    """Measures Rust files. Safe to share between worker threads."""

    def __init__(self, parser: Optional[RustParser] = None) -> None:
        self._parser = parser or RustParser()

    def measure_source(self, source: str, path: str) -> FileResult:
        """Parse and measure in-memory source text."""
        try:
            tree = self._parser.parse(source.encode("utf-8"), path)
        except ParsingError as e:
            return self._failure(path, e.reason)
        return extract_metrics(tree, path, source)

    def measure_file(
        self, file_path: Path, root_dir: Path, max_bytes: Optional[int] = None
    ) -> FileResult:
        """Read, parse and measure one file.

        Unreadable, oversized and non-UTF-8 files become ParseFailure records.
        """
        path = relative_key(file_path, root_dir)
        try:
            if max_bytes is not None and file_path.stat().st_size > max_bytes:
                return self._failure(path, f"file exceeds {max_bytes} bytes")
            with open(file_path, "rb") as f:
                raw = f.read()
        except OSError as e:
            return self._failure(path, f"cannot read file: {e.strerror or e}")

        try:
            source = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            return self._failure(path, f"not valid UTF-8 (byte {e.start})")

        logger.debug(f"Measuring {path}")
        return self.measure_source(source, path)

    @staticmethod
    def _failure(path: str, message: str) -> ParseFailure:
        logger.warning(f"Skipping {path}: {message}")
        return ParseFailure(path=path, message=message)
