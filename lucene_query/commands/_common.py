"""Helpers shared by the query commands."""

from __future__ import annotations

from rich.markup import escape

from lucene_query.search.lint import lint, render_caret
from lucene_query.utils.output import error, error_console


def join_query(query: tuple[str, ...]) -> str:
    """Join query arguments into a single string."""
    return " ".join(query)


def report_parse_error(query_string: str) -> bool:
    """Print diagnostics for *query_string*.

    Returns:
        True if the query has errors.
    """
    diagnostics = lint(query_string)
    for diagnostic in diagnostics:
        error(f"Invalid query at offset {diagnostic.start}: {escape(diagnostic.message)}")
        error_console.print(
            render_caret(query_string, diagnostic), markup=False, highlight=False
        )
    return bool(diagnostics)
