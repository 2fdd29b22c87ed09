"""Escape text for use in a query."""

from __future__ import annotations

import click

from lucene_query.cli import Context, pass_context
from lucene_query.search.escaping import escape_filter, escape_filter_value, lucene_escape

_ESCAPERS = {
    "filter": escape_filter,
    "value": escape_filter_value,
    "lucene": lucene_escape,
}


@click.command("escape")
@click.argument("value")
@click.option(
    "--mode",
    "-m",
    type=click.Choice(list(_ESCAPERS)),
    default="filter",
    help="Escaping rules to apply (default: filter)",
)
@pass_context
def cli(ctx: Context, value: str, mode: str) -> None:
    """Escape VALUE and print it.

    \b
    Modes:
      filter   Field name or bare term (escapes ':', spaces, brackets, ...)
      value    Inside a quoted phrase (escapes '"' and '\\')
      lucene   Template variable value (numbers are left alone)
    """
    click.echo(_ESCAPERS[mode](value))
