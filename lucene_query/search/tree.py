"""Search, removal and serialization over query ASTs."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from lucene_query.search.ast_nodes import IMPLICIT, Binary, Empty, LeftOnly, Node, Term


def find_node(ast: Node, field: str, term: str, prefix: str = "") -> Term | None:
    """Find the first term node matching ``field``, ``term`` and ``prefix``.

    ``field`` and ``term`` are compared against the text as written in the
    query, so callers pass already-escaped values. The walk is depth-first,
    left to right, and visits every term once.

    Args:
        ast: Root of the tree to search.
        field: Escaped field name.
        term: Escaped term text.
        prefix: Modifier prefix, ``""`` or ``"-"``.

    Returns:
        The matching node, or None.
    """
    stack: list[Node] = [ast]
    while stack:
        node = stack.pop()
        if isinstance(node, Term):
            if node.field == field and node.term == term and node.prefix == prefix:
                return node
        elif isinstance(node, LeftOnly):
            stack.append(node.left)
        elif isinstance(node, Binary):
            stack.append(node.right)
            stack.append(node.left)
    return None


def _remove(node: Node, target: Term) -> tuple[Node, bool]:
    if isinstance(node, Term):
        if node == target:
            return Empty(), True
        return node, False

    if isinstance(node, LeftOnly):
        left, removed = _remove(node.left, target)
        if not removed:
            return node, False
        if isinstance(left, Empty):
            return left, True
        return replace(node, left=left), True

    if isinstance(node, Binary):
        left, removed = _remove(node.left, target)
        if removed:
            # Promote the right side, dropping the operator
            if isinstance(left, Empty):
                return node.right, True
            return replace(node, left=left), True
        right, removed = _remove(node.right, target)
        if removed:
            if isinstance(right, Empty):
                return node.left, True
            return replace(node, right=right), True

    return node, False


def remove_node(ast: Node, target: Term) -> Node:
    """Return a copy of *ast* without the first node equal to *target*.

    The parent of the removed node collapses into its remaining child;
    a tree consisting only of *target* becomes ``Empty()``.
    """
    result, _ = _remove(ast, target)
    return result


def _term_to_string(node: Term) -> str:
    if node.quoted:
        value = f'"{node.term}"'
    elif node.regex:
        value = f"/{node.term}/"
    else:
        value = node.term
    if node.field is not None:
        value = f"{node.field}:{value}"
    return f"{node.prefix}{value}"


def to_string(ast: Node) -> str:
    """Serialize an AST back into canonical Lucene query text."""
    if isinstance(ast, Term):
        return _term_to_string(ast)

    if isinstance(ast, LeftOnly):
        text = to_string(ast.left)
        if ast.parenthesized:
            text = f"({text})"
        if ast.field is not None:
            text = f"{ast.field}:{text}"
        text = f"{ast.prefix}{text}"
        if ast.start:
            text = f"{ast.start} {text}"
        return text

    if isinstance(ast, Binary):
        # Walk the right spine iteratively, long filter chains nest there
        parts: list[str] = []
        node: Node = ast
        while isinstance(node, Binary):
            parts.append(to_string(node.left))
            if node.operator != IMPLICIT:
                parts.append(node.operator)
            node = node.right
        parts.append(to_string(node))
        return " ".join(parts)

    return ""


def to_dict(ast: Node) -> dict[str, Any]:
    """Convert an AST into plain dicts, e.g. for JSON output."""
    if isinstance(ast, Term):
        return {
            "type": "term",
            "field": ast.field,
            "term": ast.term,
            "value": ast.value,
            "prefix": ast.prefix,
            "quoted": ast.quoted,
            "regex": ast.regex,
        }
    if isinstance(ast, LeftOnly):
        return {
            "type": "left_only",
            "start": ast.start,
            "parenthesized": ast.parenthesized,
            "field": ast.field,
            "prefix": ast.prefix,
            "left": to_dict(ast.left),
        }
    if isinstance(ast, Binary):
        return {
            "type": "binary",
            "operator": ast.operator,
            "left": to_dict(ast.left),
            "right": to_dict(ast.right),
        }
    return {"type": "empty"}
