"""Helpers over tree-sitter-rust nodes.

Node type reference (tree-sitter-rust):
- function_item: function with a body (free fns, methods, trait defaults)
- function_signature_item: bodiless declaration (trait items, extern blocks)
- function_modifiers: holds the ``unsafe`` / ``async`` / ``const`` / ``extern`` keywords
- block: ``{ statements... trailing_expression? }``
- unsafe_block: ``unsafe`` followed by a block
- static_item: ``static`` with an optional mutable_specifier
- call_expression: ``function`` field is the callee expression
"""

from __future__ import annotations

from typing import Any, Optional

Node = Any

# Named children of a block that are not statements
NON_STATEMENT_NODES = frozenset({
    "label",
    "line_comment",
    "block_comment",
    "attribute_item",
    "inner_attribute_item",
    "empty_statement",
})


def child_of_type(node: Node, node_type: str) -> Optional[Node]:
    """Get first child of given type."""
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def node_text(node: Optional[Node]) -> str:
    """Safely decode node text."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def has_body(function: Node) -> bool:
    return function.type == "function_item" and function.child_by_field_name("body") is not None


def is_unsafe_function(function: Node) -> bool:
    """Whether a function declaration carries the ``unsafe`` qualifier."""
    modifiers = child_of_type(function, "function_modifiers")
    if modifiers is None:
        return False
    return any(child.type == "unsafe" for child in modifiers.children)


def is_mutable_static(item: Node) -> bool:
    return item.type == "static_item" and child_of_type(item, "mutable_specifier") is not None


def block_statements(block: Node) -> list[Node]:
    """Statements of a block, including its trailing expression."""
    return [child for child in block.named_children if child.type not in NON_STATEMENT_NODES]


def is_unsafe_scope(block: Node) -> bool:
    """Whether the block is an unsafe block or the body of an unsafe function."""
    parent = block.parent
    if parent is None:
        return False
    if parent.type == "unsafe_block":
        return True
    return parent.type == "function_item" and is_unsafe_function(parent)


def called_name(call: Node) -> Optional[str]:
    """Name of the operation invoked by a call expression.

    ``x.name()`` and ``x.name::<T>()`` give ``name``; ``Type::name(x)``
    gives ``name``. Plain ``name(x)`` and other callee shapes give None.
    """
    callee = call.child_by_field_name("function")
    if callee is not None and callee.type == "generic_function":
        callee = callee.child_by_field_name("function")
    if callee is None:
        return None
    if callee.type == "field_expression":
        return node_text(callee.child_by_field_name("field"))
    if callee.type == "scoped_identifier":
        return node_text(callee.child_by_field_name("name"))
    return None


def trailing_expression(block: Node) -> Optional[Node]:
    """The final expression of a block that is not terminated by ``;``.

    tree-sitter-rust places a trailing block-like expression (``if``,
    ``match``, ...) inside an ``expression_statement`` with no semicolon,
    so both shapes are handled.
    """
    statements = block_statements(block)
    if not statements:
        return None
    last = statements[-1]
    if last.type == "expression_statement" and last.children[-1].type == ";":
        return None
    if last.type == "macro_invocation":
        return None
    return statement_expression(last)


def statement_expression(statement: Node) -> Optional[Node]:
    """The expression carried by a statement, or None for declarations."""
    if statement.type == "expression_statement":
        return statement.named_children[0] if statement.named_children else None
    if statement.type.endswith("_item") or statement.type in (
        "let_declaration",
        "use_declaration",
        "extern_crate_declaration",
        "macro_definition",
        "associated_type",
    ):
        return None
    return statement
