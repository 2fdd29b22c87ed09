"""Parsed Lucene queries and filter manipulation."""

from __future__ import annotations

import logging
from typing import Literal

from lucene_query.search.ast_nodes import ModifierType, Node, Term
from lucene_query.search.escaping import escape_filter, escape_filter_value
from lucene_query.search.parser import ParseError, parse_expression
from lucene_query.search.tree import find_node, remove_node, to_string

log = logging.getLogger(__name__)

OperatorType = Literal["AND", "OR"]


def concatenate(query: str, filter: str, operator: OperatorType | None = None) -> str:
    """Merge a query with a filter.

    Args:
        query: Existing query text.
        filter: Clause to append.
        operator: Explicit boolean operator; when omitted the clauses are
            joined by a space (implicit AND).

    Returns:
        The combined query text.
    """
    if not filter:
        return query
    if query.strip() == "":
        return filter

    query = query.rstrip()
    if operator:
        return f"{query} {operator} {filter}"
    return f"{query} {filter}"


class QueryTree:
    """A parsed query: its AST, the text it came from and any parse error.

    Instances are treated as immutable; the filter operations return new
    trees. Exactly one of ``ast`` and ``parse_error`` is set.
    """

    def __init__(
        self,
        ast: Node | None,
        source: str | None = None,
        parse_error: ParseError | None = None,
    ) -> None:
        self.ast = ast
        self.source = source or None
        self.parse_error = parse_error

    @classmethod
    def parse(cls, query: str) -> QueryTree:
        """Parse query text; failures are reported on ``parse_error``."""
        ast, parse_error = parse_expression(query)
        return cls(ast, query, parse_error)

    @property
    def is_valid(self) -> bool:
        return self.parse_error is None

    def find_filter(self, key: str, value: str, modifier: ModifierType = "") -> Term | None:
        """Find the term node for ``key:"value"`` carrying *modifier*.

        Key and value are escaped the same way add_filter() escapes them
        before being compared with the query text.
        """
        if self.ast is None:
            return None
        return find_node(self.ast, escape_filter(key), escape_filter_value(value), modifier)

    def has_filter(self, key: str, value: str, modifier: ModifierType = "") -> bool:
        return self.find_filter(key, value, modifier) is not None

    def add_filter(
        self,
        key: str,
        value: str,
        modifier: ModifierType = "",
        *,
        operator: OperatorType | None = None,
    ) -> QueryTree:
        """Append ``{modifier}key:"value"`` to the query.

        Adding a filter that is already present returns this tree unchanged.
        The result is re-parsed from the combined text, so it works on a
        tree that failed to parse as well (the result will too).

        Args:
            key: Field name (unescaped).
            value: Field value (unescaped).
            modifier: ``""`` to include matches, ``"-"`` to exclude them.
            operator: Operator used to join the new clause, implicit if None.

        Returns:
            A new QueryTree, or this one if nothing changed.
        """
        if self.has_filter(key, value, modifier):
            log.debug("Filter %s%s:%r already present", modifier, key, value)
            return self

        filter_text = f'{modifier}{escape_filter(key)}:"{escape_filter_value(value)}"'
        return QueryTree.parse(concatenate(self.to_string(), filter_text, operator))

    def remove_filter(self, key: str, value: str, modifier: ModifierType = "") -> QueryTree:
        """Remove the first ``{modifier}key:"value"`` clause from the tree.

        Returns this tree unchanged when the filter is not present or the
        query failed to parse. The returned tree has no source text; its
        text is serialized from the AST.
        """
        node = self.find_filter(key, value, modifier)
        if node is None or self.ast is None:
            return self

        log.debug("Removing filter %s%s:%r", modifier, key, value)
        return QueryTree(remove_node(self.ast, node))

    def to_string(self) -> str:
        if self.source:
            return self.source
        if self.ast is not None:
            return to_string(self.ast)
        return ""

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        if self.parse_error is not None:
            return f"QueryTree(source={self.source!r}, parse_error={self.parse_error.message!r})"
        return f"QueryTree({self.to_string()!r})"


def parse(query: str) -> QueryTree:
    """Parse query text into a QueryTree."""
    return QueryTree.parse(query)


def toggle_filter(
    tree: QueryTree,
    key: str,
    value: str,
    modifier: ModifierType = "",
    *,
    operator: OperatorType | None = None,
) -> QueryTree:
    """Remove the filter if the query has it, add it otherwise."""
    if tree.has_filter(key, value, modifier):
        return tree.remove_filter(key, value, modifier)
    return tree.add_filter(key, value, modifier, operator=operator)
