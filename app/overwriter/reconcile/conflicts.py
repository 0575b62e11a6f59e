"""Conflict discovery between an incoming and an existing snapshot."""

import logging
import os
from collections.abc import Callable

from overwriter.reconcile.models import Conflict, PathEntry, TreeSnapshot

logger = logging.getLogger(__name__)

ExistsPredicate = Callable[[PathEntry], bool]


def exists_on_disk(entry: PathEntry) -> bool:
    """Check that an entry is still a regular file on disk."""
    return entry.path.is_file()


def find_conflicts(
    source: TreeSnapshot,
    destination: TreeSnapshot,
    exists: ExistsPredicate | None = None,
) -> list[Conflict]:
    """Pair incoming files with existing files of the same relative path.

    The destination is indexed by relative path (last entry wins).
    Conflicts keep the source snapshot order. A destination entry
    that has vanished from disk is not a conflict, and neither is a
    pair that is the same file on disk.

    Args:
        source: Snapshot of incoming files.
        destination: Snapshot of existing files.
        exists: Predicate telling whether a destination entry is still
            on disk. Defaults to a regular-file check.

    Returns:
        Conflicts in source order.
    """
    check = exists or exists_on_disk
    index = destination.index()

    conflicts: list[Conflict] = []
    for entry in source:
        match = index.get(entry.relative_path)
        if match is None:
            continue
        if not check(match):
            logger.debug("Destination vanished, not a conflict: %s", match.path)
            continue
        if _same_file(entry, match):
            logger.debug("Same file on both sides, not a conflict: %s", match.path)
            continue
        conflicts.append(Conflict(source=entry, destination=match))

    return conflicts


def find_new_entries(source: TreeSnapshot, destination: TreeSnapshot) -> list[PathEntry]:
    """Return incoming entries with no counterpart in the destination.

    These are left for the caller to import normally.
    """
    index = destination.index()
    return [entry for entry in source if entry.relative_path not in index]


def _same_file(a: PathEntry, b: PathEntry) -> bool:
    """Check whether two entries point at the same file on disk."""
    if a.path == b.path:
        return True
    try:
        return os.path.samefile(a.path, b.path)
    except OSError:
        return False
