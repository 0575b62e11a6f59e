"""Compare command implementation."""

from pathlib import Path
from typing import Annotated

import typer

from overwriter.reconcile.compare import files_equal
from overwriter.utils.formatting import print_error, print_info, print_success


def compare(
    first: Annotated[
        Path,
        typer.Argument(help="First file.", exists=True, dir_okay=False),
    ],
    second: Annotated[
        Path,
        typer.Argument(help="Second file.", exists=True, dir_okay=False),
    ],
) -> None:
    """Check whether two files hold the same bytes.

    Exits 0 if identical, 1 if different, 2 if they could not be read.
    """
    result = files_equal(first, second)

    if result.error is not None:
        print_error(f"Could not compare files: {result.error}")
        raise typer.Exit(code=2)

    if result.equal:
        print_success("Files are identical.")
        return

    print_info("Files differ.")
    raise typer.Exit(code=1)
