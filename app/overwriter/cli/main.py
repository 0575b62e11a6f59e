"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from overwriter import __version__
from overwriter.cli.commands import compare, config, conflicts, merge
from overwriter.core.config import ConfigError, load_config
from overwriter.core.theme import get_rich_theme
from overwriter.utils.formatting import use_theme

logger = logging.getLogger(__name__)

# Create main Typer app
app = typer.Typer(
    name="overwriter",
    help="Merge dropped files into an existing tree, resolving same-path conflicts.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"overwriter version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file to use instead of the default location.",
        ),
    ] = None,
) -> None:
    """overwriter - merge dropped files into an existing tree.

    Files that already exist are replaced, skipped, or kept alongside
    the incoming copy, one conflict at a time.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if config_path is not None:
        _load_theme(config_path)


def _load_theme(config_path: Path) -> None:
    """Restyle the consoles with the colors of an explicitly given config file."""
    try:
        colors = load_config(config_path).colors
    except ConfigError as e:
        # Commands report the broken file when they load their settings.
        logger.debug("Theme not loaded from %s: %s", config_path, e)
        return
    use_theme(get_rich_theme(colors))


# Register commands
app.command(name="merge")(merge.merge)
app.command(name="conflicts")(conflicts.conflicts)
app.command(name="compare")(compare.compare)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
