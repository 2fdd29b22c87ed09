"""AST data classes for parsed Lucene queries.

A query tree is one of four node kinds:

- ``Empty``: the empty query (matches everything).
- ``Term``: a leaf ``field:value`` or bare value clause.
- ``LeftOnly``: a single wrapped sub-expression (parenthesized group,
  ``field:(...)`` group or a unary ``NOT``).
- ``Binary``: two sub-expressions joined by an operator.

Nodes are frozen; every tree operation builds new nodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeGuard

from lucene_query.search.escaping import unescape

IMPLICIT = "<implicit>"
AND = "AND"
OR = "OR"
NOT = "NOT"

ModifierType = Literal["", "-"]


@dataclass(frozen=True)
class Empty:
    """The empty query."""


@dataclass(frozen=True)
class Term:
    """A leaf clause like ``status:"error"`` or ``-host:web1``.

    ``field`` and ``term`` hold the text exactly as written in the query,
    escapes included. ``field`` is None for the default field.
    """

    term: str
    field: str | None = None
    prefix: str = ""
    quoted: bool = False
    regex: bool = False

    @property
    def value(self) -> str:
        """The term with Lucene escapes removed."""
        return unescape(self.term)


@dataclass(frozen=True)
class LeftOnly:
    """A node wrapping a single sub-expression.

    Either a group (``parenthesized``, optionally scoped to ``field`` and
    carrying a ``prefix``) or a negation (``start == "NOT"``).
    """

    left: Node
    start: str | None = None
    parenthesized: bool = False
    field: str | None = None
    prefix: str = ""


@dataclass(frozen=True)
class Binary:
    """Two sub-expressions joined by ``operator``."""

    left: Node
    operator: str
    right: Node


Node = Empty | Term | LeftOnly | Binary


def is_left_only(node: object) -> TypeGuard[LeftOnly]:
    return isinstance(node, LeftOnly)


def is_binary(node: object) -> TypeGuard[Binary]:
    return isinstance(node, Binary)


def is_ast(node: object) -> bool:
    """Return whether *node* is a composite (left-only or binary) node."""
    return is_left_only(node) or is_binary(node)


def is_term(node: object) -> TypeGuard[Term]:
    return isinstance(node, Term)
