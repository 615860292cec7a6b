"""Tree-sitter parser wrapper for Rust.

Usage:
    parser = RustParser()
    tree = parser.parse(code_bytes, "src/lib.rs")
    captures = parser.query(tree, "(function_item name: (identifier) @name)")

A ``tree_sitter.Parser`` is not safe to share between threads, so each
thread gets its own lazily created parser. The ``Language`` object is
shared.
"""

from __future__ import annotations

import threading
from typing import Any, Optional

import tree_sitter
import tree_sitter_rust

from ..exceptions import ParsingError

RUST_LANGUAGE = tree_sitter.Language(tree_sitter_rust.language())

Node = tree_sitter.Node
Tree = tree_sitter.Tree
Capture = tuple[Node, str]


def first_error(node: Node) -> Optional[Node]:
    """Return the first ERROR or MISSING node in document order, if any."""
    if not node.has_error:
        return None
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        # Reverse so the leftmost child is visited first
        stack.extend(child for child in reversed(current.children) if child.has_error)
    return None


class RustParser:
    """Thread-aware wrapper around a tree-sitter Rust parser."""

    def __init__(self) -> None:
        self._local = threading.local()

    def _parser(self) -> Any:
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = tree_sitter.Parser(RUST_LANGUAGE)
            self._local.parser = parser
        return parser

    def parse(self, code: bytes, path: str = "<memory>") -> Tree:
        """Parse code and return its syntax tree.

        Args:
            code: Source code as bytes
            path: File path used in error messages

        Returns:
            Tree with no syntax errors

        Raises:
            ParsingError: If the source contains syntax errors
        """
        tree = self._parser().parse(code)
        error = first_error(tree.root_node)
        if error is not None:
            line, column = error.start_point
            kind = "missing token" if error.is_missing else "syntax error"
            raise ParsingError(path, f"{kind} at line {line + 1}, column {column + 1}")
        return tree

    def query(self, tree: Tree, query_str: str) -> list[Capture]:
        """Run a query on a syntax tree.

        Args:
            tree: Syntax tree from parse()
            query_str: S-expression query string

        Returns:
            List of (node, capture_name) tuples in match order
        """
        query = tree_sitter.Query(RUST_LANGUAGE, query_str)
        # tree-sitter 0.25+: use QueryCursor for execution
        cursor = tree_sitter.QueryCursor(query)
        result: list[Capture] = []
        for _pattern_id, captures_dict in cursor.matches(tree.root_node):
            for capture_name, nodes in captures_dict.items():
                for node in nodes:
                    result.append((node, capture_name))
        return result
