"""API services."""

from snakedraft.api.services.draft_service import (
    DraftService,
    get_draft_service,
    reset_draft_service,
)

__all__ = ["DraftService", "get_draft_service", "reset_draft_service"]
