"""Editor diagnostics for query text."""

from __future__ import annotations

from dataclasses import dataclass

from lucene_query.search.query import parse


@dataclass(frozen=True)
class Diagnostic:
    """A problem in query text, as 0-based character offsets."""

    severity: str
    message: str
    start: int
    end: int


def lint(text: str) -> list[Diagnostic]:
    """Return diagnostics for *text*; empty when the query parses.

    A zero-width error span is widened to one character where text remains,
    so there is always something to underline.
    """
    error = parse(text).parse_error
    if error is None:
        return []

    start = error.location.start.offset
    end = error.location.end.offset
    if end <= start and start < len(text):
        end = start + 1
    return [Diagnostic(severity="error", message=error.message, start=start, end=end)]


def render_caret(text: str, diagnostic: Diagnostic) -> str:
    """Render the line containing *diagnostic* with a ``^`` underline."""
    line_start = text.rfind("\n", 0, diagnostic.start) + 1
    line_end = text.find("\n", diagnostic.start)
    if line_end == -1:
        line_end = len(text)

    column = diagnostic.start - line_start
    width = max(1, min(diagnostic.end, line_end) - diagnostic.start)
    return f"{text[line_start:line_end]}\n{' ' * column}{'^' * width}"
