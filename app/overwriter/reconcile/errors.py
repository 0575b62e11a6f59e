"""Exceptions raised while reconciling incoming files with an existing tree."""

from pathlib import Path


class ReconcileError(Exception):
    """Base exception for reconciliation errors."""


class NotFoundError(ReconcileError):
    """Raised when a declared root no longer exists at snapshot time."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Path does not exist: {path}")


class ActionError(ReconcileError):
    """Base exception for I/O failures while applying a resolution.

    Attributes:
        path: The path the failed operation was acting on.
    """

    def __init__(self, message: str, path: Path) -> None:
        self.path = path
        super().__init__(message)


class ReplaceError(ActionError):
    """Raised when the destination could not be overwritten.

    The destination is left exactly as it was before the attempt.
    """


class DeleteError(ActionError):
    """Raised when an incoming file or its sidecar could not be removed."""


class InvalidResolutionError(ReconcileError):
    """Raised when a decision provider returns something other than a Resolution."""


class ReconcileCancelled(ReconcileError):
    """Raised by a decision provider to stop processing the remaining conflicts."""
