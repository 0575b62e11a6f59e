"""Byte-level file comparison.

Used to resolve a conflict without prompting when the incoming and
existing files already hold the same bytes.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class Comparison:
    """Result of comparing two files.

    Attributes:
        equal: True only if both files were read fully and matched.
        error: I/O error message if the comparison could not complete.
    """

    equal: bool
    error: str | None = None

    def __bool__(self) -> bool:
        return self.equal


def files_equal(a: Path | str, b: Path | str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Comparison:
    """Compare two files byte by byte.

    Identical paths are equal without touching the disk. Otherwise the
    sizes are compared first and, if they match, both files are read in
    lockstep until a mismatch or the end of both. I/O failures fail
    closed: the files are reported as different and the error is
    returned instead of raised.

    Args:
        a: First file.
        b: Second file.
        chunk_size: Bytes read from each file per step.

    Returns:
        Comparison describing the outcome.
    """
    path_a = Path(a)
    path_b = Path(b)

    if path_a == path_b:
        return Comparison(equal=True)

    try:
        if path_a.stat().st_size != path_b.stat().st_size:
            return Comparison(equal=False)

        with path_a.open("rb") as fa, path_b.open("rb") as fb:
            while True:
                chunk_a = fa.read(chunk_size)
                chunk_b = fb.read(chunk_size)
                if chunk_a != chunk_b:
                    return Comparison(equal=False)
                if not chunk_a:
                    return Comparison(equal=True)
    except OSError as e:
        logger.warning("Could not compare %s and %s: %s", path_a, path_b, e)
        return Comparison(equal=False, error=str(e))
