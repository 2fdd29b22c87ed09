"""Add, remove and test field:value filters."""

from __future__ import annotations

import click

from lucene_query.cli import EXIT_INVALID, Context, pass_context
from lucene_query.exceptions import ValidationError
from lucene_query.search.adhoc import ADHOC_OPERATORS, AdHocFilter, add_adhoc_filter
from lucene_query.search.ast_nodes import ModifierType
from lucene_query.search.query import QueryTree, parse, toggle_filter
from lucene_query.utils.output import error, warning

_EXCLUDE_OPTION = click.option(
    "--exclude/--include",
    "-x/-i",
    default=None,
    help="Match the negated filter -FIELD:\"VALUE\" (default: query.default_modifier)",
)


def _modifier(ctx: Context, exclude: bool | None) -> ModifierType:
    if exclude is None:
        return "-" if ctx.settings.default_modifier == "-" else ""
    return "-" if exclude else ""


def _parse(ctx: Context, query: str) -> QueryTree:
    tree = parse(query)
    if tree.parse_error is not None and not ctx.quiet:
        warning(f"Query does not parse: {tree.parse_error.message}")
    return tree


@click.group("filter")
def cli() -> None:
    """Add, remove and test field:value filters.

    Filters are clauses of the form FIELD:"VALUE", optionally negated as
    -FIELD:"VALUE" with --exclude. FIELD and VALUE are given unescaped.
    """
    pass


@cli.command("add")
@click.argument("query")
@click.argument("field")
@click.argument("value")
@_EXCLUDE_OPTION
@pass_context
def add_cmd(ctx: Context, query: str, field: str, value: str, exclude: bool | None) -> None:
    """Append FIELD:"VALUE" to QUERY unless it is already there."""
    operator = ctx.settings.default_operator or None
    tree = _parse(ctx, query).add_filter(
        field, value, _modifier(ctx, exclude), operator=operator
    )
    click.echo(tree.to_string())


@cli.command("remove")
@click.argument("query")
@click.argument("field")
@click.argument("value")
@_EXCLUDE_OPTION
@pass_context
def remove_cmd(ctx: Context, query: str, field: str, value: str, exclude: bool | None) -> None:
    """Remove FIELD:"VALUE" from QUERY.

    Prints QUERY unchanged when the filter is not present.
    """
    tree = _parse(ctx, query).remove_filter(field, value, _modifier(ctx, exclude))
    click.echo(tree.to_string())


@cli.command("has")
@click.argument("query")
@click.argument("field")
@click.argument("value")
@_EXCLUDE_OPTION
@pass_context
def has_cmd(ctx: Context, query: str, field: str, value: str, exclude: bool | None) -> None:
    """Print whether QUERY contains FIELD:"VALUE"; exit 1 if it does not."""
    found = _parse(ctx, query).has_filter(field, value, _modifier(ctx, exclude))
    click.echo("true" if found else "false")
    if not found:
        raise SystemExit(EXIT_INVALID)


@cli.command("toggle")
@click.argument("query")
@click.argument("field")
@click.argument("value")
@_EXCLUDE_OPTION
@pass_context
def toggle_cmd(ctx: Context, query: str, field: str, value: str, exclude: bool | None) -> None:
    """Remove FIELD:"VALUE" if QUERY has it, add it otherwise."""
    tree = toggle_filter(
        _parse(ctx, query),
        field,
        value,
        _modifier(ctx, exclude),
        operator=ctx.settings.default_operator or None,
    )
    click.echo(tree.to_string())


@cli.command("adhoc")
@click.argument("query")
@click.argument("key")
@click.argument("operator")
@click.argument("value")
@pass_context
def adhoc_cmd(ctx: Context, query: str, key: str, operator: str, value: str) -> None:
    """Apply a dashboard ad-hoc filter KEY OPERATOR VALUE to QUERY.

    \b
    Operators:
      =   !=   KEY:"VALUE" / -KEY:"VALUE"
      =~  !~   KEY:/VALUE/ / -KEY:/VALUE/
      >   <    KEY:>VALUE / KEY:<VALUE
    """
    try:
        text = add_adhoc_filter(
            query,
            AdHocFilter(key=key, operator=operator, value=value),
            operator=ctx.settings.default_operator or None,
        )
    except ValidationError as e:
        error(str(e), hint=f"Use one of: {' '.join(ADHOC_OPERATORS)}")
        raise SystemExit(EXIT_INVALID)
    click.echo(text)
