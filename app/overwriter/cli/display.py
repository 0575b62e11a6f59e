"""Shared Rich display functions for conflicts and run results."""

from pathlib import Path

from rich.table import Table

from overwriter.reconcile.compare import files_equal
from overwriter.reconcile.models import Conflict, ConflictOutcome, Resolution, RunResult
from overwriter.utils.formatting import console, print_info, print_success, print_warning

RESOLUTION_LABELS: dict[Resolution, str] = {
    Resolution.REPLACE: "[replace]replace[/replace]",
    Resolution.SKIP: "[skip]skip[/skip]",
    Resolution.KEEP_BOTH: "[keep_both]keep both[/keep_both]",
}


def format_size(size_bytes: int | None) -> str:
    """Format byte count as human-readable string."""
    if size_bytes is None or size_bytes == 0:
        return "0 B"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} TB"


def _file_size(path: Path) -> str:
    try:
        return format_size(path.stat().st_size)
    except OSError:
        return "-"


def create_conflicts_table(conflicts: list[Conflict]) -> Table:
    """Create a Rich table listing conflicts.

    Args:
        conflicts: Conflicts in resolution order.

    Returns:
        Rich Table with path, both sizes, and whether the contents match.
    """
    table = Table(
        title="Conflicts",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", width=4, justify="right")
    table.add_column("Path", no_wrap=True)
    table.add_column("Incoming", justify="right")
    table.add_column("Existing", justify="right")
    table.add_column("Same", width=6, justify="center")

    for number, conflict in enumerate(conflicts, start=1):
        same = files_equal(conflict.source.path, conflict.destination.path)
        table.add_row(
            str(number),
            conflict.relative_path,
            _file_size(conflict.source.path),
            _file_size(conflict.destination.path),
            "[success]yes[/success]" if same else "[muted]no[/muted]",
        )

    return table


def create_outcomes_table(outcomes: list[ConflictOutcome]) -> Table:
    """Create a Rich table displaying per-conflict outcomes.

    Args:
        outcomes: Outcomes of a run.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Resolution", width=10)
    table.add_column("Path", no_wrap=True)
    table.add_column("Details")

    for outcome in outcomes:
        if outcome.dry_run:
            status = "[info]dry-run[/info]"
            detail = "Would apply"
        elif outcome.success:
            status = "[success]OK[/success]"
            detail = "automatic" if outcome.automatic else ""
        else:
            status = "[error]FAIL[/error]"
            detail = outcome.error or "Unknown error"

        table.add_row(
            status,
            RESOLUTION_LABELS[outcome.resolution],
            outcome.relative_path,
            f"[muted]{detail}[/muted]",
        )

    return table


def print_run_summary(result: RunResult) -> None:
    """Print a summary of a reconciliation run."""
    counts = result.counts()
    parts = [
        f"{counts[Resolution.REPLACE]} replaced",
        f"{counts[Resolution.SKIP]} skipped",
        f"{counts[Resolution.KEEP_BOTH]} kept both",
    ]
    summary = ", ".join(parts)

    if result.cancelled:
        print_warning(f"Cancelled after {len(result.outcomes)} conflict(s): {summary}")
    elif result.failed:
        console.print(f"\n{summary}, [error]{len(result.failed)} failed[/error]")
    else:
        print_success(f"Done: {summary}.")

    if result.removed_dirs:
        print_info(f"Removed {len(result.removed_dirs)} emptied directory(ies).")
