"""Conflicts command implementation.

Lists the paths a merge would ask about, without changing anything.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from overwriter.cli.commands.common import load_settings, snapshot_pair
from overwriter.cli.display import create_conflicts_table
from overwriter.reconcile.compare import files_equal
from overwriter.reconcile.conflicts import find_conflicts, find_new_entries
from overwriter.reconcile.models import Conflict, PathEntry
from overwriter.utils.formatting import console, print_success


class OutputFormat(str, Enum):
    """Output format options for the conflict listing."""

    TABLE = "table"
    JSON = "json"


def conflicts(
    ctx: typer.Context,
    source: Annotated[
        Path,
        typer.Argument(help="Incoming file or folder.", exists=True, resolve_path=True),
    ],
    destination: Annotated[
        Path,
        typer.Argument(
            help="Existing folder to compare against.",
            exists=True,
            file_okay=False,
            resolve_path=True,
        ),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List files in SOURCE that already exist in DESTINATION."""
    settings = load_settings(ctx)
    pair = snapshot_pair(source, destination, settings)

    found = find_conflicts(pair.source, pair.destination)
    new_entries = find_new_entries(pair.source, pair.destination)

    if output_format == OutputFormat.JSON:
        _print_json(found, new_entries)
        return

    if not found:
        print_success("No conflicts found.")
    else:
        console.print(create_conflicts_table(found))

    console.print(
        f"\n[dim]{len(found)} conflict(s), {len(new_entries)} new file(s) "
        f"out of {len(pair.source)} incoming[/dim]"
    )


def _print_json(found: list[Conflict], new_entries: list[PathEntry]) -> None:
    """Display conflicts and new files as JSON."""
    data = {
        "conflicts": [
            {
                "relative_path": c.relative_path,
                "source": str(c.source.path),
                "destination": str(c.destination.path),
                "identical": files_equal(c.source.path, c.destination.path).equal,
            }
            for c in found
        ],
        "new": [entry.relative_path for entry in new_entries],
    }
    console.print_json(json.dumps(data))
