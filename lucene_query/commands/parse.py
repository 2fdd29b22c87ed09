"""Parse a query and print its structure."""

from __future__ import annotations

import json

import click
from rich.markup import escape
from rich.tree import Tree

from lucene_query.cli import EXIT_INVALID, Context, pass_context
from lucene_query.commands._common import join_query, report_parse_error
from lucene_query.search.ast_nodes import IMPLICIT, Binary, LeftOnly, Node, Term
from lucene_query.search.query import parse
from lucene_query.search.tree import to_dict, to_string
from lucene_query.utils.output import console


def _term_label(node: Term) -> str:
    text = escape(node.term)
    if node.quoted:
        text = f'"{text}"'
    elif node.regex:
        text = f"/{text}/"
    label = f"[query.term]{text}[/query.term]"
    if node.field is not None:
        label = f"[query.field]{escape(node.field)}[/query.field]:{label}"
    return f"{escape(node.prefix)}{label}"


def _group_label(node: LeftOnly) -> str:
    if node.start:
        return f"[query.operator]{node.start}[/query.operator]"
    label = "[query.group]( )[/query.group]"
    if node.field is not None:
        label = f"[query.field]{escape(node.field)}[/query.field]:{label}"
    return f"{escape(node.prefix)}{label}"


def _add_node(parent: Tree, node: Node) -> None:
    if isinstance(node, Term):
        parent.add(_term_label(node))
    elif isinstance(node, LeftOnly):
        _add_node(parent.add(_group_label(node)), node.left)
    elif isinstance(node, Binary):
        operator = "AND (implicit)" if node.operator == IMPLICIT else node.operator
        branch = parent.add(f"[query.operator]{operator}[/query.operator]")
        _add_node(branch, node.left)
        _add_node(branch, node.right)
    else:
        parent.add("[query.group](empty)[/query.group]")


@click.command("parse")
@click.argument("query", nargs=-1)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "tree", "json"]),
    default="text",
    help="Output format (default: text)",
)
@pass_context
def cli(ctx: Context, query: tuple[str, ...], output_format: str) -> None:
    """Parse a query and print it.

    QUERY is a Lucene query string. Multiple arguments are joined with
    spaces. Invalid queries are reported with the position of the error
    and exit with status 1.

    \b
    Output formats:
      --format text   Canonical query text (default)
      --format tree   Indented node tree
      --format json   AST as JSON
    """
    query_string = join_query(query)
    tree = parse(query_string)

    if tree.ast is None:
        report_parse_error(query_string)
        raise SystemExit(EXIT_INVALID)

    if output_format == "json":
        click.echo(json.dumps(to_dict(tree.ast), indent=2))
    elif output_format == "tree":
        root = Tree(f"[info]{escape(query_string) or '(empty query)'}[/info]")
        _add_node(root, tree.ast)
        console.print(root)
    else:
        click.echo(to_string(tree.ast))
