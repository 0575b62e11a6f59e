"""Incoming/existing tree reconciliation.

This module provides snapshot building, conflict discovery, the
resolution driver, and the file operations behind each resolution.
"""

from overwriter.reconcile.compare import Comparison, files_equal
from overwriter.reconcile.conflicts import exists_on_disk, find_conflicts, find_new_entries
from overwriter.reconcile.deciders import (
    Capabilities,
    PolicyDecider,
    ScriptedDecider,
    fixed_stickiness,
)
from overwriter.reconcile.errors import (
    ActionError,
    DeleteError,
    InvalidResolutionError,
    NotFoundError,
    ReconcileCancelled,
    ReconcileError,
    ReplaceError,
)
from overwriter.reconcile.models import (
    Conflict,
    ConflictOutcome,
    PathEntry,
    Resolution,
    RunResult,
    RunState,
    TreeSnapshot,
)
from overwriter.reconcile.operator import ReconcileOperator
from overwriter.reconcile.reconciler import Reconciler, reconcile
from overwriter.reconcile.snapshot import (
    DEFAULT_SIDECAR_SUFFIX,
    build_snapshot,
    is_sidecar,
    make_exclude,
    sidecar_for,
)

__all__ = [
    "DEFAULT_SIDECAR_SUFFIX",
    "ActionError",
    "Capabilities",
    "Comparison",
    "Conflict",
    "ConflictOutcome",
    "DeleteError",
    "InvalidResolutionError",
    "NotFoundError",
    "PathEntry",
    "PolicyDecider",
    "ReconcileCancelled",
    "ReconcileError",
    "ReconcileOperator",
    "Reconciler",
    "ReplaceError",
    "Resolution",
    "RunResult",
    "RunState",
    "ScriptedDecider",
    "TreeSnapshot",
    "build_snapshot",
    "exists_on_disk",
    "files_equal",
    "find_conflicts",
    "find_new_entries",
    "fixed_stickiness",
    "is_sidecar",
    "make_exclude",
    "reconcile",
    "sidecar_for",
]
