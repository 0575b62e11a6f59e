"""Tree snapshot builder.

Expands a set of dropped roots (files or directories) into the
ordered list of leaf files beneath them, with paths made relative
to a common base directory. Sidecar metadata files and other
excluded names are dropped on the way.
"""

import fnmatch
import logging
import os
from collections.abc import Callable, Iterable, Iterator, Mapping
from pathlib import Path

from overwriter.reconcile.errors import NotFoundError
from overwriter.reconcile.models import PathEntry, TreeSnapshot

logger = logging.getLogger(__name__)

# Sidecar files travel next to every asset as "<name><suffix>".
DEFAULT_SIDECAR_SUFFIX = ".meta"

ExcludePredicate = Callable[[Path], bool]


def is_sidecar(path: Path, suffix: str = DEFAULT_SIDECAR_SUFFIX) -> bool:
    """Check if a path is a sidecar file.

    Args:
        path: Path to check.
        suffix: Sidecar suffix (e.g. ".meta").

    Returns:
        True if the file name ends with the suffix and has a stem.
    """
    if not suffix:
        return False
    name = path.name
    return name.endswith(suffix) and len(name) > len(suffix)


def sidecar_for(path: Path, suffix: str = DEFAULT_SIDECAR_SUFFIX) -> Path:
    """Return the sidecar location for a file or directory."""
    return path.with_name(path.name + suffix)


def make_exclude(
    patterns: Iterable[str] = (),
    sidecar_suffix: str | None = DEFAULT_SIDECAR_SUFFIX,
) -> ExcludePredicate:
    """Build an exclusion predicate from glob patterns.

    Patterns are matched against the file name with fnmatch. Sidecar
    files are always excluded when a suffix is given.

    Args:
        patterns: Glob patterns such as ".DS_Store" or "*.tmp".
        sidecar_suffix: Sidecar suffix to exclude, or None to keep sidecars.

    Returns:
        Predicate returning True for paths to leave out.
    """
    pattern_list = list(patterns)

    def exclude(path: Path) -> bool:
        if sidecar_suffix and is_sidecar(path, sidecar_suffix):
            return True
        return any(fnmatch.fnmatch(path.name, pattern) for pattern in pattern_list)

    return exclude


def build_snapshot(
    roots: Iterable[Path | str],
    base_dir: Path | str,
    exclude: ExcludePredicate | None = None,
    renames: Mapping[Path, Path] | None = None,
) -> TreeSnapshot:
    """Build an immutable snapshot of every file under the given roots.

    All roots are checked before any enumeration so that a vanished
    root fails the whole build.

    Args:
        roots: Files or directories to expand.
        base_dir: Directory relative paths are computed against.
        exclude: Predicate for files to leave out (e.g. sidecars).
        renames: Maps a root that the host renamed on arrival to the
            path it stands for. Relative paths are computed from the
            logical path while absolute paths stay physical.

    Returns:
        TreeSnapshot with entries in deterministic order.

    Raises:
        NotFoundError: If a root does not exist.
        ValueError: If a root is not inside base_dir.
    """
    base = _absolute(base_dir)
    root_paths = [_absolute(root) for root in roots]
    logical_roots = {_absolute(k): _absolute(v) for k, v in (renames or {}).items()}

    for root in root_paths:
        if not root.exists():
            raise NotFoundError(root)

    entries: list[PathEntry] = []
    for root in root_paths:
        logical = logical_roots.get(root, root)
        for file_path in _expand_root(root):
            if exclude is not None and exclude(file_path):
                logger.debug("Excluded from snapshot: %s", file_path)
                continue
            logical_path = logical / file_path.relative_to(root) if file_path != root else logical
            relative = _relative_to(logical_path, base)
            entries.append(PathEntry(path=file_path, relative_path=relative))

    logger.debug("Snapshot of %d root(s) under %s: %d file(s)", len(root_paths), base, len(entries))
    return TreeSnapshot(
        base_dir=base,
        entries=tuple(entries),
        roots=tuple(root_paths),
        renames=tuple(
            (root, logical) for root, logical in logical_roots.items() if root in root_paths
        ),
    )


def _expand_root(root: Path) -> Iterator[Path]:
    """Yield the regular files a root stands for, in sorted order."""
    if root.is_file():
        yield root
        return

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        current = Path(dirpath)
        for filename in sorted(filenames):
            candidate = current / filename
            if candidate.is_file():
                yield candidate


def _relative_to(path: Path, base: Path) -> str:
    """Make an absolute path relative to base, as a POSIX string."""
    try:
        relative = path.relative_to(base)
    except ValueError:
        msg = f"{path} is not inside base directory {base}"
        raise ValueError(msg) from None
    return relative.as_posix()


def _absolute(path: Path | str) -> Path:
    """Make a path absolute and collapse "." and ".." segments."""
    return Path(os.path.normpath(Path(path).absolute()))
