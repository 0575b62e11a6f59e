"""Reconciliation domain models.

This module defines the data structures used while merging incoming
files into an existing tree: path entries, immutable tree snapshots,
conflicts, resolutions, and per-run results.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath


class Resolution(str, Enum):
    """How a single conflict is resolved.

    Attributes:
        REPLACE: Overwrite the existing file with the incoming one.
        SKIP: Discard the incoming file and leave the existing one alone.
        KEEP_BOTH: Leave both files where they are.
    """

    REPLACE = "replace"
    SKIP = "skip"
    KEEP_BOTH = "keep_both"

    @property
    def consumes_source(self) -> bool:
        """Check if applying this resolution removes the incoming file."""
        return self in (Resolution.REPLACE, Resolution.SKIP)


class RunState(str, Enum):
    """State of a reconciliation run.

    Attributes:
        IDLE: Between conflicts (or not started).
        AWAITING_DECISION: Waiting for the decision provider.
        APPLYING: Applying a resolution to the file system.
        DONE: All conflicts processed, or the run was cancelled.
    """

    IDLE = "idle"
    AWAITING_DECISION = "awaiting_decision"
    APPLYING = "applying"
    DONE = "done"


def normalize_relative(relative_path: str) -> str:
    """Normalize a relative path to POSIX form.

    Backslashes are converted to forward slashes and ``.`` segments
    are dropped.

    Args:
        relative_path: Relative path in any separator convention.

    Returns:
        Normalized POSIX relative path.

    Raises:
        ValueError: If the path is empty, absolute, or escapes its base.
    """
    posix = relative_path.replace("\\", "/")
    if not posix or posix.startswith("/"):
        msg = f"Relative path must be non-empty and not absolute: {relative_path!r}"
        raise ValueError(msg)

    parts = [part for part in PurePosixPath(posix).parts if part != "."]
    if not parts or ".." in parts:
        msg = f"Relative path must stay inside its base directory: {relative_path!r}"
        raise ValueError(msg)
    return "/".join(parts)


@dataclass(frozen=True, slots=True)
class PathEntry:
    """A file located both absolutely and relative to a base directory.

    Attributes:
        path: Absolute location on disk.
        relative_path: POSIX path relative to the base directory (join key).
    """

    path: Path
    relative_path: str

    def __post_init__(self) -> None:
        """Normalize and validate the relative path."""
        object.__setattr__(self, "relative_path", normalize_relative(self.relative_path))

    @property
    def name(self) -> str:
        """File name of the entry."""
        return self.path.name


@dataclass(frozen=True, slots=True)
class TreeSnapshot:
    """Immutable, ordered view of the files under a set of roots.

    Attributes:
        base_dir: Directory the relative paths are computed against.
        entries: File entries in build order.
        roots: Roots the snapshot was expanded from.
        renames: (renamed root, pre-existing path) pairs for roots the
            host renamed on arrival.
    """

    base_dir: Path
    entries: tuple[PathEntry, ...] = ()
    roots: tuple[Path, ...] = ()
    renames: tuple[tuple[Path, Path], ...] = ()

    def __iter__(self) -> Iterator[PathEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def index(self) -> dict[str, PathEntry]:
        """Index entries by relative path.

        Later entries with a duplicate relative path overwrite earlier ones.

        Returns:
            Mapping of relative path to entry.
        """
        return {entry.relative_path: entry for entry in self.entries}

    def relative_paths(self) -> list[str]:
        """Relative paths in snapshot order."""
        return [entry.relative_path for entry in self.entries]


@dataclass(frozen=True, slots=True)
class Conflict:
    """An incoming file whose relative path already exists in the destination.

    Attributes:
        source: The incoming entry.
        destination: The existing entry it collides with.
    """

    source: PathEntry
    destination: PathEntry

    @property
    def relative_path(self) -> str:
        """Shared relative path of both sides."""
        return self.source.relative_path


@dataclass(frozen=True, slots=True)
class ConflictOutcome:
    """Result of resolving a single conflict.

    Attributes:
        relative_path: Relative path of the conflict.
        resolution: Resolution that was applied.
        success: Whether the file operations completed.
        error: Error message if an operation failed, None otherwise.
        error_kind: Name of the error class if an operation failed.
        automatic: True if resolved without asking (sticky or identical files).
        dry_run: Whether this was a dry-run (no changes on disk).
    """

    relative_path: str
    resolution: Resolution
    success: bool = True
    error: str | None = None
    error_kind: str | None = None
    automatic: bool = False
    dry_run: bool = False

    @property
    def failed(self) -> bool:
        """Check if the resolution failed."""
        return not self.success


@dataclass(slots=True)
class RunResult:
    """Outcome of one reconciliation run.

    Created fresh for each run and never persisted.

    Attributes:
        outcomes: One outcome per processed conflict, in processing order.
        state: Final state of the run.
        cancelled: True if the run stopped before the last conflict.
        removed_dirs: Directories removed during cleanup.
    """

    outcomes: list[ConflictOutcome] = field(default_factory=lambda: [])
    state: RunState = RunState.IDLE
    cancelled: bool = False
    removed_dirs: list[Path] = field(default_factory=lambda: [])

    @property
    def failed(self) -> list[ConflictOutcome]:
        """Outcomes that recorded an error."""
        return [o for o in self.outcomes if o.failed]

    @property
    def succeeded(self) -> list[ConflictOutcome]:
        """Outcomes that completed without error."""
        return [o for o in self.outcomes if o.success]

    def counts(self) -> dict[Resolution, int]:
        """Count successful outcomes per resolution."""
        counts = dict.fromkeys(Resolution, 0)
        for outcome in self.succeeded:
            counts[outcome.resolution] += 1
        return counts
