"""
Draft error taxonomy.

Every error raised by the pick recorder carries the freshest snapshot it
read (when one exists) so a client can resynchronize without a second
read.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from snakedraft.core.models import DraftSnapshot


class DraftError(Exception):
    """Base class for draft errors."""

    code = "draft_error"

    def __init__(self, message: str, snapshot: Optional["DraftSnapshot"] = None):
        super().__init__(message)
        self.message = message
        self.snapshot = snapshot

    def with_snapshot(self, snapshot: Optional["DraftSnapshot"]) -> "DraftError":
        """Attach a snapshot if none is set yet. Returns self for re-raising."""
        if self.snapshot is None:
            self.snapshot = snapshot
        return self


class DraftValidationError(DraftError):
    """Malformed or out-of-range input, rejected before touching state."""

    code = "validation"


class DraftConflictError(DraftError):
    """Proposal no longer matches fresh state. Safe to retry with fresh state."""

    code = "conflict"


class DraftNotFoundError(DraftError):
    """No active draft for the given id."""

    code = "not_found"


class DraftExhaustionError(DraftError):
    """No eligible player remains for the roster on the clock."""

    code = "exhaustion"


ValidationError = DraftValidationError
ConflictError = DraftConflictError
NotFoundError = DraftNotFoundError
ExhaustionError = DraftExhaustionError
