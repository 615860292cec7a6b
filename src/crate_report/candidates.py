"""Heuristic refactoring candidates.

Two finders, both purely syntactic:

- ``safe``: unsafe functions none of whose parameters mention a raw pointer
  type. Such a function may not need to be ``unsafe`` at all.
- ``bool``: functions declared to return ``i32`` whose every ``return`` value
  and final expression is the literal ``0`` or ``1``. Such a function may be
  better off returning ``bool``.

Both report false positives; they point at code worth a look, nothing more.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

from .config import DEFAULT_CONFIG, ReportConfig
from .exceptions import ParsingError
from .logging_config import get_logger
from .scanning import RustParser, discover_sources, relative_key
from .scanning.nodes import (
    NON_STATEMENT_NODES,
    child_of_type,
    has_body,
    is_unsafe_function,
    node_text,
    trailing_expression,
)
from .scanning.treesitter_parser import Node, Tree

logger = get_logger(__name__)

FUNCTION_QUERY = "(function_item) @function"

# Subtrees whose ``return`` belongs to something other than the enclosing function
_RETURN_BOUNDARIES = frozenset({"function_item", "closure_expression", "async_block"})

_INTEGER_LITERAL = re.compile(
    r"^(?P<digits>0[xX][0-9a-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+|[0-9][0-9_]*)"
    r"(?:[iu](?:8|16|32|64|128|size))?$"
)

_BASES = {"0x": 16, "0o": 8, "0b": 2}


class CandidateKind(str, Enum):
    SAFE = "safe"
    BOOL = "bool"


@dataclass(frozen=True)
class Candidate:
    """A function flagged by a finder. ``line`` is 1-based."""

    name: str
    path: str
    line: int

    def __str__(self) -> str:
        return f"{self.name} @ {self.path}:{self.line}"


@dataclass(frozen=True)
class FileCandidates:
    path: str
    candidates: tuple[Candidate, ...]


# ── Safe candidates ─────────────────────────────────────────────────


def has_raw_pointer_parameter(function: Node) -> bool:
    """Whether any parameter type contains ``*const T`` or ``*mut T``, at any depth."""
    parameters = function.child_by_field_name("parameters")
    if parameters is None:
        return False
    stack = list(parameters.named_children)
    while stack:
        node = stack.pop()
        if node.type == "pointer_type":
            return True
        stack.extend(node.named_children)
    return False


def is_safe_candidate(function: Node) -> bool:
    return has_body(function) and is_unsafe_function(function) and not has_raw_pointer_parameter(function)


# ── Bool candidates ─────────────────────────────────────────────────


def integer_value(text: str) -> Optional[int]:
    """Value of a Rust integer literal, or None if ``text`` is not one.

    Underscores, ``0x`` / ``0o`` / ``0b`` prefixes and type suffixes such as
    ``i32`` or ``usize`` are understood.
    """
    match = _INTEGER_LITERAL.match(text)
    if match is None:
        return None
    digits = match.group("digits").replace("_", "")
    base = _BASES.get(digits[:2].lower())
    if base is not None:
        return int(digits[2:], base) if len(digits) > 2 else None
    return int(digits)


def is_zero_or_one_literal(expr: Optional[Node]) -> bool:
    """``0``, ``1``, ``-0``, with any suffix or radix, optionally parenthesized."""
    if expr is None:
        return False
    if expr.type == "parenthesized_expression":
        inner = [c for c in expr.named_children if c.type not in NON_STATEMENT_NODES]
        return len(inner) == 1 and is_zero_or_one_literal(inner[0])
    if expr.type == "integer_literal":
        return integer_value(node_text(expr)) in (0, 1)
    if expr.type == "unary_expression" and expr.children and expr.children[0].type == "-":
        operand = expr.named_children[-1] if expr.named_children else None
        if operand is not None and operand.type == "integer_literal":
            value = integer_value(node_text(operand))
            return value is not None and -value in (0, 1)
    return False


def returns_i32(function: Node) -> bool:
    return_type = function.child_by_field_name("return_type")
    if return_type is None:
        return False
    if return_type.type == "primitive_type":
        return node_text(return_type) == "i32"
    if return_type.type == "scoped_type_identifier":
        return node_text(return_type.child_by_field_name("name")) == "i32"
    return False


def _return_expressions(body: Node) -> Iterator[Node]:
    """Every ``return`` that exits the function owning ``body``."""
    stack = list(body.named_children)
    while stack:
        node = stack.pop()
        if node.type in _RETURN_BOUNDARIES:
            continue
        if node.type == "return_expression":
            yield node
        stack.extend(node.named_children)


def _return_value(return_expr: Node) -> Optional[Node]:
    values = [c for c in return_expr.named_children if c.type not in NON_STATEMENT_NODES]
    return values[0] if values else None


def _yields_zero_or_one(expr: Node) -> bool:
    """Whether an expression in tail position can only evaluate to 0 or 1.

    ``return`` expressions are accepted here; their values are checked
    separately.
    """
    kind = expr.type
    if kind == "return_expression" or is_zero_or_one_literal(expr):
        return True
    if kind == "unsafe_block":
        block = child_of_type(expr, "block")
        return block is not None and _yields_zero_or_one(block)
    if kind == "block":
        tail = trailing_expression(expr)
        if tail is not None:
            return _yields_zero_or_one(tail)
        # No tail: the block must diverge through a return
        return any(True for _ in _return_expressions(expr))
    if kind == "if_expression":
        consequence = expr.child_by_field_name("consequence")
        alternative = expr.child_by_field_name("alternative")
        if consequence is None or alternative is None:
            return False
        branch = alternative.named_children[0] if alternative.named_children else None
        return (
            _yields_zero_or_one(consequence)
            and branch is not None
            and _yields_zero_or_one(branch)
        )
    if kind == "match_expression":
        body = expr.child_by_field_name("body")
        if body is None:
            return False
        arms = [arm for arm in body.named_children if arm.type == "match_arm"]
        return bool(arms) and all(
            (value := arm.child_by_field_name("value")) is not None and _yields_zero_or_one(value)
            for arm in arms
        )
    return False


def returns_only_zero_or_one(function: Node) -> bool:
    """Every return path of the function yields the literal 0 or 1.

    A function with no return path at all is not a match.
    """
    body = function.child_by_field_name("body")
    if body is None:
        return False

    returns = list(_return_expressions(body))
    if not all(is_zero_or_one_literal(_return_value(r)) for r in returns):
        return False

    tail = trailing_expression(body)
    if tail is None:
        return bool(returns)
    return _yields_zero_or_one(tail)


def is_bool_candidate(function: Node) -> bool:
    return has_body(function) and returns_i32(function) and returns_only_zero_or_one(function)


# ── Scanning ────────────────────────────────────────────────────────

FINDERS: Dict[CandidateKind, Callable[[Node], bool]] = {
    CandidateKind.SAFE: is_safe_candidate,
    CandidateKind.BOOL: is_bool_candidate,
}


def find_candidates(
    tree: Tree, path: str, kind: CandidateKind, parser: Optional[RustParser] = None
) -> List[Candidate]:
    """Candidates of one kind in a parsed file, in source order."""
    parser = parser or RustParser()
    accept = FINDERS[CandidateKind(kind)]
    functions = [node for node, _ in parser.query(tree, FUNCTION_QUERY)]
    functions.sort(key=lambda node: node.start_byte)
    return [
        Candidate(
            name=node_text(node.child_by_field_name("name")),
            path=path,
            line=node.start_point[0] + 1,
        )
        for node in functions
        if accept(node)
    ]


def scan_candidates(
    root_dir: Path, kind: CandidateKind, config: ReportConfig = DEFAULT_CONFIG
) -> List[FileCandidates]:
    """Scan every Rust file under ``root_dir``; files without candidates are omitted.

    Unreadable and unparseable files are skipped.
    """
    parser = RustParser()
    results: List[FileCandidates] = []

    for file_path in discover_sources(root_dir, config):
        path = relative_key(file_path, root_dir)
        try:
            with open(file_path, "rb") as f:
                source = f.read().decode("utf-8-sig")
            tree = parser.parse(source.encode("utf-8"), path)
        except (OSError, UnicodeDecodeError, ParsingError) as e:
            logger.debug(f"Skipping {path} during candidate scan: {e}")
            continue

        found = find_candidates(tree, path, kind, parser)
        if found:
            results.append(FileCandidates(path=path, candidates=tuple(found)))

    return results
