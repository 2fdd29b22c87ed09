"""Show and change configuration values."""

from __future__ import annotations

import click

from lucene_query.cli import EXIT_CONFIG_ERROR, Context, pass_context
from lucene_query.config import CONFIG_KEYS, save_config, set_config_value
from lucene_query.exceptions import ConfigValidationError
from lucene_query.utils.output import error, success


@click.group("config")
def cli() -> None:
    """Show and change configuration values."""
    pass


@cli.command("show")
@pass_context
def show_cmd(ctx: Context) -> None:
    """Print the effective configuration as KEY = VALUE lines."""
    config = ctx.settings
    source = str(config.config_path) if config.config_path else "(defaults)"
    click.echo(f"# {source}")
    for key, attr in CONFIG_KEYS.items():
        value = getattr(config, attr)
        if isinstance(value, bool):
            text = "true" if value else "false"
        else:
            text = f'"{value}"'
        click.echo(f"{key} = {text}")


@cli.command("set")
@click.argument("key", type=click.Choice(list(CONFIG_KEYS)))
@click.argument("value")
@pass_context
def set_cmd(ctx: Context, key: str, value: str) -> None:
    """Set KEY to VALUE and write the config file.

    \b
    Examples:
      lucene-query config set query.default_operator OR
      lucene-query config set display.colored_output false
    """
    config = ctx.settings
    try:
        set_config_value(config, key, value)
    except ConfigValidationError as e:
        error(str(e))
        raise SystemExit(EXIT_CONFIG_ERROR)

    save_config(config, config.config_path or ctx.config_file)
    if not ctx.quiet:
        success(f"Set {key} = {value}")
