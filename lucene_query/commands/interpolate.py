"""Expand template variables in a query."""

from __future__ import annotations

import json
from typing import Any

import click

from lucene_query.cli import Context, pass_context
from lucene_query.search.adhoc import interpolate


def _split_assignment(param: str, raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}", param_hint=param)
    return name, value


@click.command("interpolate")
@click.argument("query")
@click.option(
    "--var",
    "-V",
    "assignments",
    multiple=True,
    metavar="NAME=VALUE",
    help="Variable value; repeat a name to give it several values",
)
@click.option(
    "--field",
    "-F",
    "fields",
    multiple=True,
    metavar="NAME=FIELD",
    help="Field a multi-value variable filters on",
)
@pass_context
def cli(
    ctx: Context,
    query: str,
    assignments: tuple[str, ...],
    fields: tuple[str, ...],
) -> None:
    """Replace $NAME and ${NAME} in QUERY with escaped values.

    A variable given once is escaped as a single value. A variable given
    several times becomes IN ["a" "b"], or "a" OR FIELD:"b" when its
    field is set with --field.

    \b
    Examples:
      lucene-query interpolate 'host:$host' --var host=web-1
      lucene-query interpolate 'host:$host' -V host=a -V host=b -F host=host
    """
    values: dict[str, list[str]] = {}
    for raw in assignments:
        name, value = _split_assignment("--var", raw)
        values.setdefault(name, []).append(value)

    variables: dict[str, Any] = {
        name: items[0] if len(items) == 1 else items for name, items in values.items()
    }

    variable_queries: dict[str, str] = {}
    for raw in fields:
        name, field = _split_assignment("--field", raw)
        variable_queries[name] = json.dumps({"field": field})

    click.echo(
        interpolate(query, variables, variable_queries, empty_value=ctx.settings.empty_value)
    )
