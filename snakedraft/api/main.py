"""FastAPI application for the snake draft service."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from snakedraft.api.routers import draft_router
from snakedraft.api.schemas.draft import DraftStateSchema
from snakedraft.catalog import CatalogError
from snakedraft.core.errors import DraftError

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"

# DraftError.code -> HTTP status
ERROR_STATUS: dict[str, int] = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "conflict": status.HTTP_409_CONFLICT,
    "exhaustion": status.HTTP_422_UNPROCESSABLE_ENTITY,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    logger.info("Snakedraft API starting up...")
    yield
    logger.info("Snakedraft API shutting down...")


def _error_body(error: str, message: str, snapshot=None) -> dict:
    state = DraftStateSchema.from_model(snapshot).model_dump() if snapshot else None
    return {"error": error, "message": message, "state": state}


async def draft_error_handler(request: Request, exc: DraftError) -> JSONResponse:
    code = ERROR_STATUS.get(exc.code, status.HTTP_400_BAD_REQUEST)
    if code == status.HTTP_409_CONFLICT:
        logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=code, content=_error_body(exc.code, exc.message, exc.snapshot))


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    logger.error(f"Catalog unavailable for {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=_error_body("catalog_unavailable", f"Failed to seed players: {exc}"),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("validation", problems or "Invalid request"),
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Snakedraft API",
        description="Superflex snake draft with archetype drafters",
        version=API_VERSION,
        lifespan=lifespan,
    )

    # Configure CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",  # Vite dev server
            "http://localhost:5173",  # Alternative Vite port
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DraftError, draft_error_handler)
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(draft_router, prefix="/api/v1")

    @app.get("/")
    async def root() -> dict:
        """Root endpoint - API info."""
        return {
            "name": "Snakedraft API",
            "version": API_VERSION,
            "description": "Superflex snake draft",
            "docs": "/docs",
        }

    @app.get("/health")
    async def health() -> dict:
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Create app instance
app = create_app()


def run_api(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Run the API server."""
    uvicorn.run(
        "snakedraft.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    run_api(reload=True)
