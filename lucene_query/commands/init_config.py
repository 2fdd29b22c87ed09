"""Write the annotated example configuration."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import click

from lucene_query.cli import Context, pass_context
from lucene_query.config import get_default_config_path
from lucene_query.utils.output import error, info, success

# Written config files are readable by their owner only
CONFIG_FILE_MODE = 0o600


def _load_example_config() -> str:
    """Return the packaged config.example.toml."""
    return resources.files("lucene_query").joinpath("config.example.toml").read_text()


@click.command("init-config")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Replace a config file that already exists",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the file (default: ~/.config/lucene-query/config.toml)",
)
@click.option(
    "--stdout",
    "to_stdout",
    is_flag=True,
    default=False,
    help="Print the example config instead of writing it",
)
@pass_context
def cli(ctx: Context, force: bool, output: Path | None, to_stdout: bool) -> None:
    """Write the example config with the [display], [query] and [variables] sections.

    Every key is present with its default value and a comment. Edit the
    operator and modifier defaults afterwards, or use `config set`.

    \b
      lucene-query init-config
      lucene-query init-config -o ./lucene-query.toml --force
      lucene-query init-config --stdout > config.toml
    """
    content = _load_example_config()
    if to_stdout:
        click.echo(content, nl=False)
        return

    target = (output or get_default_config_path()).expanduser().resolve()
    if target.exists() and not force:
        error(f"Config file already exists: {target}", hint="Use --force to overwrite")
        raise SystemExit(1)

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        target.chmod(CONFIG_FILE_MODE)
    except OSError as e:
        error(f"Cannot write {target}: {e}")
        raise SystemExit(1)

    if not ctx.quiet:
        success(f"Wrote {target}")
        info("Run `lucene-query config show` to check the loaded values.")
