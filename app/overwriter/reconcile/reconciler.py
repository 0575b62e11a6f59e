"""Reconciliation driver.

Walks the conflicts between an incoming and an existing snapshot one
at a time, asks the host how to resolve each one, and applies the
answer. After the first answer the host is asked, once, whether the
answer should apply to every remaining conflict.

The run is synchronous and performs no locking: callers must make
sure nothing else mutates either tree while a run is in progress.
"""

import logging

from overwriter.reconcile.compare import files_equal
from overwriter.reconcile.conflicts import ExistsPredicate, find_conflicts
from overwriter.reconcile.deciders import AskStickinessFn, Capabilities, DecideFn, OnCompleteFn
from overwriter.reconcile.errors import InvalidResolutionError, ReconcileCancelled
from overwriter.reconcile.models import (
    Conflict,
    ConflictOutcome,
    Resolution,
    RunResult,
    RunState,
    TreeSnapshot,
)
from overwriter.reconcile.operator import ReconcileOperator

logger = logging.getLogger(__name__)


class Reconciler:
    """Resolves conflicts between two snapshots through injected callbacks.

    A Reconciler holds no state between runs; the sticky answer and the
    run state are reset by every call to run().

    Attributes:
        state: Current state of the run in progress (or the last one).
    """

    def __init__(
        self,
        decide: DecideFn,
        ask_stickiness: AskStickinessFn,
        *,
        operator: ReconcileOperator | None = None,
        on_complete: OnCompleteFn | None = None,
        exists: ExistsPredicate | None = None,
        skip_identical: bool = False,
        cleanup: bool = True,
    ) -> None:
        """Initialize the Reconciler.

        Args:
            decide: Returns the resolution for a conflict.
            ask_stickiness: Asked once, after the first decision.
            operator: Applies resolutions on disk. Defaults to a
                ReconcileOperator with the ".meta" sidecar suffix.
            on_complete: Called once at the end of every run that did
                not raise.
            exists: Destination existence check used during discovery.
            skip_identical: Resolve byte-identical conflicts as SKIP
                without asking.
            cleanup: Remove directories emptied by consumed incoming files.
        """
        self._decide = decide
        self._ask_stickiness = ask_stickiness
        self._operator = operator or ReconcileOperator()
        self._on_complete = on_complete
        self._exists = exists
        self._skip_identical = skip_identical
        self._cleanup = cleanup

        self.state = RunState.IDLE
        self._apply_to_all = False
        self._remembered: Resolution | None = None
        self._asked_stickiness = False

    def run(self, source: TreeSnapshot, destination: TreeSnapshot) -> RunResult:
        """Reconcile an incoming snapshot with an existing one.

        Args:
            source: Snapshot of incoming files.
            destination: Snapshot of existing files.

        Returns:
            RunResult with one outcome per processed conflict.

        Raises:
            InvalidResolutionError: If the decision provider broke its contract.
        """
        conflicts = find_conflicts(source, destination, self._exists)
        return self.resolve(conflicts, source)

    def resolve(self, conflicts: list[Conflict], source: TreeSnapshot | None = None) -> RunResult:
        """Resolve an already discovered conflict sequence.

        Args:
            conflicts: Conflicts in the order they should be resolved.
            source: Incoming snapshot, used for directory cleanup.

        Returns:
            RunResult with one outcome per processed conflict.

        Raises:
            InvalidResolutionError: If the decision provider broke its contract.
        """
        self.state = RunState.IDLE
        self._apply_to_all = False
        self._remembered = None
        self._asked_stickiness = False

        result = RunResult()
        logger.debug("Resolving %d conflict(s)", len(conflicts))

        for conflict in conflicts:
            try:
                resolution, automatic = self._choose(conflict)
            except ReconcileCancelled:
                logger.info("Run cancelled before %s", conflict.relative_path)
                result.cancelled = True
                break
            except InvalidResolutionError:
                self.state = RunState.IDLE
                raise

            self.state = RunState.APPLYING
            result.outcomes.append(self._operator.apply(conflict, resolution, automatic=automatic))
            self.state = RunState.IDLE

        if self._cleanup and source is not None:
            consumed = [
                conflict.source.path
                for conflict, outcome in zip(conflicts, result.outcomes, strict=False)
                if outcome.success and outcome.resolution.consumes_source
            ]
            protected = [logical for _, logical in source.renames]
            result.removed_dirs = self._operator.cleanup(source.roots, consumed, protected)

        self.state = RunState.DONE
        result.state = RunState.DONE

        if self._on_complete is not None:
            self._on_complete()

        return result

    def _choose(self, conflict: Conflict) -> tuple[Resolution, bool]:
        """Pick the resolution for one conflict.

        Returns:
            The resolution and whether it was chosen without asking.

        Raises:
            ReconcileCancelled: If the host cancelled the run.
            InvalidResolutionError: If the decision is not a Resolution.
        """
        if self._skip_identical and files_equal(conflict.source.path, conflict.destination.path):
            logger.info("Identical content, skipping without asking: %s", conflict.relative_path)
            return Resolution.SKIP, True

        if self._apply_to_all and self._remembered is not None:
            return self._remembered, True

        self.state = RunState.AWAITING_DECISION
        resolution = _coerce(self._decide(conflict), conflict)

        if not self._asked_stickiness:
            self._asked_stickiness = True
            if self._ask_stickiness():
                self._apply_to_all = True
                self._remembered = resolution
                logger.info("Applying %s to all remaining conflicts", resolution.value)

        return resolution, False


def reconcile(
    source: TreeSnapshot,
    destination: TreeSnapshot,
    capabilities: Capabilities,
    *,
    operator: ReconcileOperator | None = None,
    skip_identical: bool = False,
) -> RunResult:
    """Reconcile two snapshots with the given host capabilities.

    Args:
        source: Snapshot of incoming files.
        destination: Snapshot of existing files.
        capabilities: Callbacks supplied by the host.
        operator: Applies resolutions on disk.
        skip_identical: Resolve byte-identical conflicts without asking.

    Returns:
        RunResult for the run.
    """
    reconciler = Reconciler(
        capabilities.decide,
        capabilities.ask_stickiness,
        operator=operator,
        on_complete=capabilities.on_complete,
        exists=capabilities.exists,
        skip_identical=skip_identical,
    )
    return reconciler.run(source, destination)


def _coerce(value: object, conflict: Conflict) -> Resolution:
    """Convert a decision to a Resolution or raise InvalidResolutionError."""
    if isinstance(value, Resolution):
        return value
    if isinstance(value, str):
        try:
            return Resolution(value)
        except ValueError:
            pass
    msg = f"Invalid resolution {value!r} for {conflict.relative_path}"
    raise InvalidResolutionError(msg)
