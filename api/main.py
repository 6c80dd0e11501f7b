#!/usr/bin/env python3
"""
Lodging API - HTTP command surface for dormitory bed placement.

Exposes the inventory, the assignment ledger, auto-placement and placement
warnings of a single in-process workspace.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lodging.logging_config import configure_logging, get_logger

from .dependencies import get_workspace
from .settings import get_settings

# Format: 2026-01-06T14:05:52Z [api] LEVEL message
configure_logging(source="api", level=get_settings().log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the workspace at startup so config errors surface early."""
    workspace = get_workspace()
    logger.info(
        f"Workspace ready: {len(workspace.inventory.dormitories)} dormitories, "
        f"{len(workspace.inventory.all_beds())} active beds"
    )
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Lodging API", description="Dormitory bed placement API", lifespan=lifespan)

    settings = get_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    from .routers import assignments, inventory, suggestions, validation

    app.include_router(inventory.router)
    app.include_router(assignments.router)
    app.include_router(suggestions.router)
    app.include_router(validation.router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "service": "lodging-api"}

    return app


# Create app instance for uvicorn
app = create_app()
