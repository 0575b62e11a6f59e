"""Merge command implementation.

Reconciles an incoming file or folder with an existing directory,
prompting for every conflicting path.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from overwriter.cli.commands.common import SnapshotPair, load_settings, snapshot_pair
from overwriter.cli.display import create_outcomes_table, print_run_summary
from overwriter.cli.prompts import PromptDecider, confirm_apply_to_all
from overwriter.reconcile.conflicts import find_conflicts, find_new_entries
from overwriter.reconcile.deciders import PolicyDecider, fixed_stickiness
from overwriter.reconcile.errors import InvalidResolutionError
from overwriter.reconcile.models import Resolution
from overwriter.reconcile.operator import ReconcileOperator
from overwriter.reconcile.reconciler import Reconciler
from overwriter.utils.formatting import console, print_error, print_info, print_success

logger = logging.getLogger(__name__)


class ResolutionChoice(str, Enum):
    """Resolution applied to every conflict with --all."""

    REPLACE = "replace"
    SKIP = "skip"
    KEEP_BOTH = "keep-both"

    def to_resolution(self) -> Resolution:
        """Map the CLI spelling to a Resolution."""
        return Resolution(self.value.replace("-", "_"))


def merge(
    ctx: typer.Context,
    source: Annotated[
        Path,
        typer.Argument(help="Incoming file or folder.", exists=True, resolve_path=True),
    ],
    destination: Annotated[
        Path,
        typer.Argument(
            help="Existing folder to merge into.",
            exists=True,
            file_okay=False,
            resolve_path=True,
        ),
    ],
    apply_all: Annotated[
        ResolutionChoice | None,
        typer.Option(
            "--all",
            "-a",
            help="Resolve every conflict this way without asking.",
            case_sensitive=False,
        ),
    ] = None,
    skip_identical: Annotated[
        bool | None,
        typer.Option(
            "--skip-identical/--ask-identical",
            help="Skip files with identical content without asking (default from config).",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be done without changing files."),
    ] = False,
) -> None:
    """Merge SOURCE into DESTINATION, asking how to resolve each conflict."""
    settings = load_settings(ctx)
    pair: SnapshotPair = snapshot_pair(source, destination, settings)

    conflicts = find_conflicts(pair.source, pair.destination)
    new_entries = find_new_entries(pair.source, pair.destination)

    if new_entries:
        print_info(f"{len(new_entries)} new file(s) without conflicts, left in place.")

    if not conflicts:
        print_success("No conflicts found.")
        return

    console.print(f"Found {len(conflicts)} conflict(s).")

    if apply_all is not None:
        decide = PolicyDecider(apply_all.to_resolution())
        ask_stickiness = fixed_stickiness(True)
    else:
        decide = PromptDecider()
        ask_stickiness = confirm_apply_to_all

    reconciler = Reconciler(
        decide,
        ask_stickiness,
        operator=ReconcileOperator(
            sidecar_suffix=settings.sidecar_suffix or None,
            dry_run=dry_run,
        ),
        on_complete=lambda: logger.debug("Run complete: %s", destination),
        skip_identical=settings.skip_identical if skip_identical is None else skip_identical,
        cleanup=settings.cleanup_empty_dirs,
    )

    try:
        result = reconciler.resolve(conflicts, pair.source)
    except InvalidResolutionError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(create_outcomes_table(result.outcomes))
    print_run_summary(result)

    if result.failed:
        raise typer.Exit(code=1)
