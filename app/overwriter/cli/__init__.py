"""CLI package for overwriter.

This package contains the Typer application and all subcommands.
"""

from overwriter.cli.main import app

__all__ = ["app"]
