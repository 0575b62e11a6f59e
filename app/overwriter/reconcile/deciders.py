"""Decision providers and host capabilities.

A reconciliation run asks its host two questions: how to resolve a
conflict, and (once, after the first answer) whether that answer
should apply to every remaining conflict. Interactive hosts answer
with prompts; the providers here answer headlessly.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from overwriter.reconcile.conflicts import ExistsPredicate
from overwriter.reconcile.errors import InvalidResolutionError
from overwriter.reconcile.models import Conflict, Resolution

DecideFn = Callable[[Conflict], Resolution | str]
AskStickinessFn = Callable[[], bool]
OnCompleteFn = Callable[[], None]


@dataclass(frozen=True, slots=True)
class Capabilities:
    """Everything a host supplies to a reconciliation run.

    Attributes:
        decide: Returns the resolution for a conflict.
        ask_stickiness: Asked once after the first decision; True makes
            that decision apply to all remaining conflicts.
        on_complete: Called exactly once after a run that did not fail.
        exists: Tells whether a destination entry is still on disk.
    """

    decide: DecideFn
    ask_stickiness: AskStickinessFn
    on_complete: OnCompleteFn | None = None
    exists: ExistsPredicate | None = None


class PolicyDecider:
    """Answers every conflict with the same resolution."""

    def __init__(self, resolution: Resolution) -> None:
        self.resolution = resolution
        self.asked: list[Conflict] = []

    def __call__(self, conflict: Conflict) -> Resolution:
        self.asked.append(conflict)
        return self.resolution


class ScriptedDecider:
    """Answers conflicts from a pre-programmed list, in order.

    Records every conflict it was asked about, which makes it
    convenient for checking how often a run prompted.
    """

    def __init__(self, answers: Iterable[Resolution]) -> None:
        self._answers = list(answers)
        self.asked: list[Conflict] = []

    def __call__(self, conflict: Conflict) -> Resolution:
        if len(self.asked) >= len(self._answers):
            msg = f"No scripted answer left for {conflict.relative_path}"
            raise InvalidResolutionError(msg)
        answer = self._answers[len(self.asked)]
        self.asked.append(conflict)
        return answer


def fixed_stickiness(value: bool) -> AskStickinessFn:
    """Build an ask_stickiness callable that always answers value."""

    def ask() -> bool:
        return value

    return ask
