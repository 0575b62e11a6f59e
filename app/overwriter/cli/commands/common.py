"""Helpers shared by the reconciliation commands."""

from dataclasses import dataclass
from pathlib import Path

import typer

from overwriter.core.config import ConfigError, ReconcileSettings, load_config
from overwriter.reconcile.errors import NotFoundError
from overwriter.reconcile.models import TreeSnapshot
from overwriter.reconcile.snapshot import build_snapshot, make_exclude
from overwriter.utils.formatting import print_error


@dataclass(frozen=True, slots=True)
class SnapshotPair:
    """Incoming and existing snapshots for one command invocation."""

    source: TreeSnapshot
    destination: TreeSnapshot


def load_settings(ctx: typer.Context) -> ReconcileSettings:
    """Load reconciliation settings or exit with an error message.

    Raises:
        typer.Exit: If the configuration file is invalid.
    """
    config_path: Path | None = (ctx.obj or {}).get("config_path")
    try:
        return load_config(config_path).reconcile
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e


def snapshot_pair(source: Path, destination: Path, settings: ReconcileSettings) -> SnapshotPair:
    """Snapshot an incoming path and the directory it is merged into.

    A folder's contents are matched relative to the folder itself; a
    single file is matched by its name. Anything inside the incoming
    path is left out of the existing side.

    Raises:
        typer.Exit: If the paths overlap or a snapshot cannot be built.
    """
    if source == destination or destination.is_relative_to(source):
        print_error(f"Destination {destination} must not be inside {source}")
        raise typer.Exit(code=1)

    exclude = make_exclude(settings.exclude, settings.sidecar_suffix or None)

    def exclude_existing(path: Path) -> bool:
        return exclude(path) or path.is_relative_to(source)

    source_base = source if source.is_dir() else source.parent
    try:
        incoming = build_snapshot([source], source_base, exclude)
        existing = build_snapshot([destination], destination, exclude_existing)
    except NotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    return SnapshotPair(source=incoming, destination=existing)
