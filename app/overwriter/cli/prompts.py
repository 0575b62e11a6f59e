"""Terminal prompts backing the interactive decision provider.

Stand-ins for the editor's modal dialogs: one question per conflict
(replace / skip / keep both, or quit) and one question after the first
answer about applying it to everything that follows.
"""

import typer

from overwriter.reconcile.errors import ReconcileCancelled
from overwriter.reconcile.models import Conflict, Resolution
from overwriter.utils.formatting import console, print_warning

ANSWERS: dict[str, Resolution | None] = {
    "r": Resolution.REPLACE,
    "replace": Resolution.REPLACE,
    "s": Resolution.SKIP,
    "skip": Resolution.SKIP,
    "k": Resolution.KEEP_BOTH,
    "keep": Resolution.KEEP_BOTH,
    "keep_both": Resolution.KEEP_BOTH,
    "q": None,
    "quit": None,
}


class PromptDecider:
    """Asks on the terminal how to resolve each conflict.

    Answering "q" cancels the run; conflicts already resolved stay resolved.
    """

    def __call__(self, conflict: Conflict) -> Resolution:
        console.print(
            f"\n[warning]{conflict.relative_path}[/warning] already exists "
            f"in [muted]{conflict.destination.path.parent}[/muted]."
        )
        while True:
            answer = typer.prompt("[r]eplace, [s]kip, [k]eep both, or [q]uit", default="k")
            key = answer.strip().lower()
            if key not in ANSWERS:
                print_warning(f"Unrecognized answer: {answer!r}")
                continue
            resolution = ANSWERS[key]
            if resolution is None:
                msg = "Cancelled by user"
                raise ReconcileCancelled(msg)
            return resolution


def confirm_apply_to_all() -> bool:
    """Ask whether the first answer applies to all remaining conflicts."""
    return typer.confirm("Apply this choice to all remaining conflicts?", default=False)
