"""Append a clause to a query."""

from __future__ import annotations

import click

from lucene_query.cli import Context, pass_context
from lucene_query.search.query import concatenate


@click.command("concat")
@click.argument("query")
@click.argument("clause")
@click.option(
    "--operator",
    "-o",
    type=click.Choice(["AND", "OR"], case_sensitive=False),
    default=None,
    help="Operator joining the clause (default: query.default_operator, else implicit)",
)
@pass_context
def cli(ctx: Context, query: str, clause: str, operator: str | None) -> None:
    """Append CLAUSE to QUERY and print the result.

    The clause is added as text; nothing is parsed or deduplicated.
    """
    operator = (operator or ctx.settings.default_operator).upper() or None
    click.echo(concatenate(query, clause, operator))
