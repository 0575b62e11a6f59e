"""Configuration commands.

Shows, creates, and locates the overwriter configuration file.
"""

from pathlib import Path
from typing import Annotated

import tomli_w
import typer

from overwriter.core.config import (
    ConfigError,
    OverwriterConfig,
    config_to_dict,
    load_config,
    save_config,
)
from overwriter.core.paths import get_config_path
from overwriter.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the configuration file.",
    no_args_is_help=True,
)


def _config_path(ctx: typer.Context) -> Path:
    path: Path | None = (ctx.obj or {}).get("config_path")
    return path or get_config_path()


@app.command()
def show(ctx: typer.Context) -> None:
    """Print the effective configuration as TOML."""
    path = _config_path(ctx)
    try:
        config = load_config(path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not path.exists():
        print_info(f"No config file at {path}, showing defaults.")
    console.print(tomli_w.dumps(config_to_dict(config)), markup=False, highlight=False)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    path = _config_path(ctx)
    if path.exists() and not force:
        print_error(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(OverwriterConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the config file location."""
    typer.echo(str(_config_path(ctx)))
