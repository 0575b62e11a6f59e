"""CLI commands for overwriter.

This package contains all subcommand implementations.
"""

from overwriter.cli.commands import common, compare, config, conflicts, merge

__all__ = ["common", "compare", "config", "conflicts", "merge"]
