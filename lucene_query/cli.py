"""Command-line interface for lucene-query."""

from __future__ import annotations

import os
from pathlib import Path

import click

from lucene_query import __version__
from lucene_query.config import Config, load_config
from lucene_query.exceptions import ConfigError
from lucene_query.utils.output import (
    error,
    set_color,
    set_verbosity,
    verbose as verbose_message,
    warning,
)

EXIT_SUCCESS = 0
EXIT_INVALID = 1
EXIT_CONFIG_ERROR = 2


class Context:
    """Shared context for all commands."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.config_file: Path | None = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False

    @property
    def settings(self) -> Config:
        """Loaded configuration, or defaults when a command runs standalone."""
        if self.config is None:
            self.config = Config()
        return self.config


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False, path_type=Path),
    help="Path to config file (default: ~/.config/lucene-query/config.toml)",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug output (implies --verbose)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress non-error output",
)
@click.version_option(version=__version__, prog_name="lucene-query")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """lucene-query: Parse and edit Lucene-style search queries.

    Parses free-text boolean queries, reports syntax errors with their
    location, and adds or removes field:value filters without disturbing
    the rest of the query.

    Configuration is loaded from ~/.config/lucene-query/config.toml by default.
    Use --config to specify an alternative configuration file.

    Examples:

        # Show the structure of a query
        lucene-query parse --format tree 'status:error AND (host:web1 OR host:web2)'

        # Add a filter
        lucene-query filter add 'status:error' host web1
    """
    # Initialize context
    ctx.ensure_object(Context)
    app_ctx = ctx.obj
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet
    app_ctx.config_file = config

    # Configure module-level verbosity for output helpers
    set_verbosity(verbose=verbose, debug=debug)

    # Configure color output: disabled by --no-color, NO_COLOR env, or config
    disable_color = no_color or os.environ.get("NO_COLOR") is not None

    if disable_color:
        set_color(False)

    # Load configuration
    try:
        loaded_config, warnings = load_config(config)
    except ConfigError as e:
        error(str(e))
        ctx.exit(EXIT_CONFIG_ERROR)
        return

    app_ctx.config = loaded_config

    # Apply config settings
    if not disable_color and not loaded_config.colored_output:
        set_color(False)

    if loaded_config.config_path is not None:
        verbose_message(f"Using config {loaded_config.config_path}")

    # Show warnings only when asked for; a missing config file is normal
    if app_ctx.verbose and not quiet:
        for warn in warnings:
            warning(warn)


@cli.command("help")
@click.argument("command", required=False, nargs=-1)
@click.pass_context
def help_cmd(ctx: click.Context, command: tuple[str, ...]) -> None:
    """Show help for a command."""
    group = cli
    # Resolve subcommand chain
    for name in command:
        cmd = group.get_command(ctx, name)
        if cmd is None:
            error(f"Unknown command: {name}")
            ctx.exit(1)
            return
        if isinstance(cmd, click.Group):
            group = cmd
        else:
            click.echo(cmd.get_help(ctx))
            return
    # Print group help
    click.echo(group.get_help(ctx))


def register_commands() -> None:
    """Register all commands from the commands package."""
    from lucene_query.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


# Register commands on import
register_commands()
