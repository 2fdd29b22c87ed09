"""Parse Lucene query text into an AST."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from importlib import resources
from typing import Any

from lark import Lark, Token, Transformer, UnexpectedCharacters, UnexpectedInput, UnexpectedToken

from lucene_query.search.ast_nodes import (
    AND,
    IMPLICIT,
    NOT,
    OR,
    Binary,
    Empty,
    LeftOnly,
    Node,
    Term,
)

log = logging.getLogger(__name__)

# The grammar does not accept whitespace between a field name and its colon.
# Escapes, quoted phrases and /regex/ literals are matched first so their
# contents are never rewritten; a regex literal only starts a clause.
_NORMALIZE_RE = re.compile(
    r"""\\.
    | "(?:[^"\\]|\\.)*"
    | (?<![^\s:(+\-!])/(?:[^/\\]|\\.)*/
    | (?P<field>\w+)\s(?P<colon>:)""",
    re.DOTALL | re.VERBOSE,
)

# Human readable names for grammar terminals in error messages
_TERMINAL_NAMES: dict[str, str] = {
    "TERM": "term",
    "PHRASE": "quoted phrase",
    "REGEX": "regular expression",
    "PREFIX": "'-' or '+'",
    "AND": "AND",
    "OR": "OR",
    "NOT": "NOT",
    "LPAR": "'('",
    "RPAR": "')'",
    "COLON": "':'",
    "$END": "end of query",
}


def _load_grammar() -> str:
    """Load the Lark grammar from the package resources."""
    return resources.files("lucene_query.search").joinpath("grammar.lark").read_text()


class _QueryTransformer(Transformer):
    """Build AST nodes while the LALR parser reduces rules."""

    def start(self, items: list[Any]) -> Node:
        if not items:
            return Empty()
        return items[0]

    def implicit_op(self, items: list[Any]) -> Binary:
        left, right = items
        return Binary(left=left, operator=IMPLICIT, right=right)

    def binary_op(self, items: list[Any]) -> Binary:
        left, operator, right = items
        return Binary(left=left, operator=operator, right=right)

    def operator(self, items: list[Any]) -> str:
        token = str(items[0])
        if token in ("AND", "&&"):
            return AND
        return OR

    def prefixed(self, items: list[Any]) -> Term | LeftOnly:
        prefix, node = items
        return replace(node, prefix=str(prefix))

    def negated(self, items: list[Any]) -> LeftOnly:
        # items[0] is the NOT token ("NOT" or "!")
        return LeftOnly(left=items[-1], start=NOT)

    def field_exp(self, items: list[Any]) -> Term | LeftOnly:
        field_name, node = items
        return replace(node, field=str(field_name))

    def group(self, items: list[Any]) -> LeftOnly:
        return LeftOnly(left=items[0], parenthesized=True)

    def bare_term(self, items: list[Any]) -> Term:
        return Term(term=str(items[0]))

    def phrase_term(self, items: list[Any]) -> Term:
        # Strip surrounding quotes
        return Term(term=str(items[0])[1:-1], quoted=True)

    def regex_term(self, items: list[Any]) -> Term:
        # Strip surrounding slashes
        return Term(term=str(items[0])[1:-1], regex=True)


_parser = Lark(
    _load_grammar(),
    parser="lalr",
    lexer="basic",
    transformer=_QueryTransformer(),
)


@dataclass(frozen=True)
class SourcePosition:
    """A position in the query text (1-based line/column, 0-based offset)."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True)
class SourceLocation:
    start: SourcePosition
    end: SourcePosition


@dataclass(frozen=True)
class ParseError:
    """A query that could not be parsed.

    Attributes:
        name: Kind of failure (the grammar library's error class name).
        message: Human-readable description.
        location: Span of the offending input in the original query text.
    """

    name: str
    message: str
    location: SourceLocation


def normalize_query(query: str) -> str:
    """Remove whitespace between a word and a following colon.

    ``field :value`` becomes ``field:value``. Quoted phrases, regex
    literals and escaped characters are left as they are.
    """
    return _NORMALIZE_RE.sub(_collapse_field_space, query)


def _collapse_field_space(match: re.Match[str]) -> str:
    if match.group("field") is None:
        return match.group(0)
    return match.group("field") + match.group("colon")


def _removed_offsets(query: str) -> list[int]:
    """Offsets in *query* of the characters dropped by normalize_query()."""
    return [
        match.start("colon") - 1
        for match in _NORMALIZE_RE.finditer(query)
        if match.group("field") is not None
    ]


def _source_offset(offset: int, removed: list[int]) -> int:
    """Map an offset in the normalized text back to the original text."""
    shift = 0
    for index, position in enumerate(removed):
        if position - index > offset:
            break
        shift += 1
    return offset + shift


def _position(text: str, offset: int) -> SourcePosition:
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return SourcePosition(line=line, column=column, offset=offset)


def _describe_expected(expected: set[str] | frozenset[str]) -> str:
    names = sorted({_TERMINAL_NAMES.get(name, name) for name in expected})
    return ", ".join(names)


def _error_span(error: UnexpectedInput, text: str) -> tuple[int, int, str]:
    """Return (start, end, message) for a lark error against *text*."""
    if isinstance(error, UnexpectedToken):
        token: Token = error.token
        expected = _describe_expected(error.expected)
        if token.type == "$END":
            return len(text), len(text), f"Unexpected end of query, expected {expected}"
        start = token.start_pos or 0
        end = token.end_pos if token.end_pos is not None else start + len(token)
        return start, end, f"Unexpected token {str(token)!r}, expected {expected}"
    if isinstance(error, UnexpectedCharacters):
        start = error.pos_in_stream
        char = text[start] if start < len(text) else ""
        return start, start + 1, f"Unexpected character {char!r}"
    # UnexpectedEOF and anything else lark may add
    return len(text), len(text), "Unexpected end of query"


def parse_expression(query: str) -> tuple[Node | None, ParseError | None]:
    """Parse query text into an AST.

    Args:
        query: The raw query text.

    Returns:
        Tuple of (ast, None) on success or (None, ParseError) on failure.
        Empty or blank text parses to ``Empty()``.
    """
    normalized = normalize_query(query)
    try:
        return _parser.parse(normalized), None
    except UnexpectedInput as e:
        start, end, message = _error_span(e, normalized)
        removed = _removed_offsets(query)
        start = _source_offset(start, removed)
        end = max(start, _source_offset(end, removed))
        location = SourceLocation(start=_position(query, start), end=_position(query, end))
        log.debug("Failed to parse query %r: %s at offset %d", query, message, start)
        return None, ParseError(name=type(e).__name__, message=message, location=location)
