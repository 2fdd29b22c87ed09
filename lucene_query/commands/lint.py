"""Check query syntax."""

from __future__ import annotations

import click

from lucene_query.cli import EXIT_INVALID, Context, pass_context
from lucene_query.commands._common import join_query, report_parse_error
from lucene_query.utils.output import success


@click.command("lint")
@click.argument("query", nargs=-1)
@pass_context
def cli(ctx: Context, query: tuple[str, ...]) -> None:
    """Check that a query parses.

    Prints each problem with a caret under the offending text and exits
    with status 1 if there is any.

    \b
    Examples:
      lucene-query lint 'status:error AND'
      lucene-query lint 'host:(web1 OR web2)'
    """
    query_string = join_query(query)
    if report_parse_error(query_string):
        raise SystemExit(EXIT_INVALID)
    if not ctx.quiet:
        success("Query is valid")
