"""Resolution operator.

Applies a resolution to a single conflict on disk: atomic replace of
the existing file, removal of the incoming file together with its
sidecar, or nothing at all. Also removes the directories that were
emptied by consumed incoming files once a run is over.
"""

import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path
from tempfile import NamedTemporaryFile

from overwriter.reconcile.errors import ActionError, DeleteError, ReplaceError
from overwriter.reconcile.models import Conflict, ConflictOutcome, Resolution
from overwriter.reconcile.snapshot import DEFAULT_SIDECAR_SUFFIX, sidecar_for

logger = logging.getLogger(__name__)


class ReconcileOperator:
    """Performs the file operations behind each resolution.

    Attributes:
        _sidecar_suffix: Suffix of sidecar files that follow their primary file.
        _dry_run: If True, report what would be done without touching the disk.
    """

    def __init__(
        self,
        *,
        sidecar_suffix: str | None = DEFAULT_SIDECAR_SUFFIX,
        dry_run: bool = False,
    ) -> None:
        """Initialize the ReconcileOperator.

        Args:
            sidecar_suffix: Sidecar suffix, or None if files carry no sidecars.
            dry_run: If True, simulate operations without modifying the filesystem.
        """
        self._sidecar_suffix = sidecar_suffix
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Whether operations are simulated."""
        return self._dry_run

    def apply(
        self,
        conflict: Conflict,
        resolution: Resolution,
        *,
        automatic: bool = False,
    ) -> ConflictOutcome:
        """Apply a resolution and record the outcome.

        ReplaceError and DeleteError are recorded in the outcome rather
        than raised, so one failed file does not stop the run.

        Args:
            conflict: The conflict to resolve.
            resolution: How to resolve it.
            automatic: Whether the resolution was chosen without asking.

        Returns:
            ConflictOutcome for the conflict.
        """
        if self._dry_run:
            logger.info("Dry-run: would %s %s", resolution.value, conflict.relative_path)
            return ConflictOutcome(
                relative_path=conflict.relative_path,
                resolution=resolution,
                automatic=automatic,
                dry_run=True,
            )

        try:
            if resolution == Resolution.REPLACE:
                self.replace(conflict)
            elif resolution == Resolution.SKIP:
                self.skip(conflict)
            else:
                self.keep_both(conflict)
        except ActionError as e:
            logger.warning("Could not %s %s: %s", resolution.value, conflict.relative_path, e)
            return ConflictOutcome(
                relative_path=conflict.relative_path,
                resolution=resolution,
                success=False,
                error=str(e),
                error_kind=type(e).__name__,
                automatic=automatic,
            )

        return ConflictOutcome(
            relative_path=conflict.relative_path,
            resolution=resolution,
            automatic=automatic,
        )

    def replace(self, conflict: Conflict) -> None:
        """Overwrite the existing file with the incoming bytes.

        The new content is written to a temporary file next to the
        destination and renamed over it, so readers see either the old
        or the new bytes. The incoming file and its sidecar are removed
        afterwards.

        Raises:
            ReplaceError: If the destination could not be overwritten.
            DeleteError: If the incoming file could not be removed.
        """
        source = conflict.source.path
        destination = conflict.destination.path

        tmp_path: Path | None = None
        try:
            with (
                source.open("rb") as src,
                NamedTemporaryFile(
                    mode="wb",
                    dir=destination.parent,
                    prefix=f".{destination.name}.",
                    suffix=".tmp",
                    delete=False,
                ) as tmp,
            ):
                tmp_path = Path(tmp.name)
                shutil.copyfileobj(src, tmp)
            shutil.copymode(destination, tmp_path)
            os.replace(tmp_path, destination)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            msg = f"Failed to replace {destination}: {e}"
            raise ReplaceError(msg, destination) from e

        logger.info("Replaced %s with %s", destination, source)
        self._remove_source(source)

    def skip(self, conflict: Conflict) -> None:
        """Discard the incoming file, leaving the existing one untouched.

        Raises:
            DeleteError: If the incoming file could not be removed.
        """
        self._remove_source(conflict.source.path)
        logger.info("Skipped %s", conflict.relative_path)

    def keep_both(self, conflict: Conflict) -> None:
        """Leave both files in place."""
        logger.info("Kept both copies of %s", conflict.relative_path)

    def cleanup(
        self,
        roots: Iterable[Path],
        consumed: Iterable[Path],
        protected: Iterable[Path] = (),
    ) -> list[Path]:
        """Remove directories emptied by consumed incoming files.

        Only directories under the incoming roots that held at least one
        consumed file are candidates. They are removed deepest first,
        together with their own sidecar, and only while empty.
        Protected directories (the pre-existing side of a renamed root)
        are never removed.

        Args:
            roots: Incoming roots of the run.
            consumed: Incoming files removed by REPLACE or SKIP.
            protected: Directories that must survive cleanup.

        Returns:
            Directories that were removed, deepest first.
        """
        if self._dry_run:
            return []

        root_dirs = [Path(root).absolute() for root in roots]
        root_dirs = [root for root in root_dirs if root.is_dir()]
        keep = {Path(p).absolute() for p in protected}

        candidates: set[Path] = set()
        for path in consumed:
            for root in root_dirs:
                if not path.is_relative_to(root):
                    continue
                parent = path.parent
                while parent.is_relative_to(root):
                    candidates.add(parent)
                    if parent == root:
                        break
                    parent = parent.parent
                break

        removed: list[Path] = []
        for directory in sorted(candidates, key=lambda p: len(p.parts), reverse=True):
            if directory in keep:
                logger.debug("Leaving protected directory %s", directory)
                continue
            try:
                if any(directory.iterdir()):
                    continue
                directory.rmdir()
            except OSError as e:
                logger.warning("Could not remove directory %s: %s", directory, e)
                continue
            try:
                self._remove_sidecar(directory)
            except DeleteError as e:
                logger.warning("%s", e)
            logger.debug("Removed emptied directory %s", directory)
            removed.append(directory)

        return removed

    def _remove_source(self, path: Path) -> None:
        """Remove an incoming file and its sidecar.

        Raises:
            DeleteError: If either removal fails.
        """
        try:
            path.unlink()
        except OSError as e:
            msg = f"Failed to delete {path}: {e}"
            raise DeleteError(msg, path) from e
        self._remove_sidecar(path)

    def _remove_sidecar(self, path: Path) -> None:
        """Remove the sidecar of a file or directory, if any."""
        if not self._sidecar_suffix:
            return
        sidecar = sidecar_for(path, self._sidecar_suffix)
        try:
            sidecar.unlink(missing_ok=True)
        except OSError as e:
            msg = f"Failed to delete sidecar {sidecar}: {e}"
            raise DeleteError(msg, sidecar) from e
