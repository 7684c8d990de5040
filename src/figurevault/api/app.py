"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from figurevault import __version__
from figurevault.api.deps import set_search_service
from figurevault.api.v1.router import router as v1_router
from figurevault.config.settings import Settings
from figurevault.models.response import ErrorResponse
from figurevault.observability.logging import setup_logging
from figurevault.search.service import SearchService
from figurevault.store.base import RecordStore
from figurevault.store.memory import InMemoryRecordStore

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, store: RecordStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.
        store: Record store to search. If None, an in-memory store is built,
            seeded from ``settings.store.seed_file`` when set.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        # Auto-detect figurevault-config.yaml if present
        yaml_path = Path("figurevault-config.yaml")
        if yaml_path.exists():
            settings = Settings.from_yaml(yaml_path)
        else:
            settings = Settings()

    setup_logging(settings.observability)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        logger.info("Starting FigureVault v%s", __version__)

        record_store = store if store is not None else _build_store(settings)
        service = SearchService(settings, record_store)
        try:
            await service.initialize()
        except Exception:
            # Autocomplete and partial still answer from the local matcher.
            logger.warning("Failed to initialise %s search backend", service.backend.name, exc_info=True)

        set_search_service(service)
        app.state.settings = settings
        app.state.search_service = service

        logger.info("FigureVault is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down FigureVault...")
        await service.shutdown()
        set_search_service(None)
        logger.info("FigureVault shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        description="Search for personal figure collections.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        body = ErrorResponse(message=str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content=body.model_dump())

    app.include_router(v1_router, prefix="/v1")

    return app


def _build_store(settings: Settings) -> RecordStore:
    if settings.store.seed_file:
        logger.info("Loading figure records from %s", settings.store.seed_file)
        return InMemoryRecordStore.from_file(settings.store.seed_file)
    return InMemoryRecordStore()
