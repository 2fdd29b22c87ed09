"""Lucene query parsing and filter manipulation."""

from lucene_query.search.ast_nodes import (
    Binary,
    Empty,
    LeftOnly,
    Term,
    is_ast,
    is_binary,
    is_left_only,
    is_term,
)
from lucene_query.search.escaping import (
    escape_filter,
    escape_filter_value,
    lucene_escape,
)
from lucene_query.search.parser import ParseError, normalize_query, parse_expression
from lucene_query.search.query import QueryTree, concatenate, parse, toggle_filter

__all__ = [
    "Binary",
    "Empty",
    "LeftOnly",
    "ParseError",
    "QueryTree",
    "Term",
    "concatenate",
    "escape_filter",
    "escape_filter_value",
    "is_ast",
    "is_binary",
    "is_left_only",
    "is_term",
    "lucene_escape",
    "normalize_query",
    "parse",
    "parse_expression",
    "toggle_filter",
]
