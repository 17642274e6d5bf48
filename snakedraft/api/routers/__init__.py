"""API routers."""

from snakedraft.api.routers.draft import router as draft_router

__all__ = ["draft_router"]
