"""FastAPI application factory and lifespan management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from wavesearch import __version__
from wavesearch.config import Settings
from wavesearch.lifecycle import SearchRuntime
from wavesearch.middleware.auth import APIKeyMiddleware
from wavesearch.middleware.logging import RequestLoggingMiddleware
from wavesearch.routes import admin, health, search

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Start the search runtime on startup and drain it on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    runtime: SearchRuntime = app.state.runtime
    logger.info(
        "api_startup",
        host=settings.host,
        port=settings.port,
        solr=settings.solr_base_url,
    )

    await runtime.start()
    try:
        yield
    finally:
        await runtime.stop()
        logger.info("api_shutdown")


def create_app(
    settings: Settings | None = None,
    runtime: SearchRuntime | None = None,
) -> FastAPI:
    """Factory function to create configured FastAPI application.

    Args:
        settings: Configuration instance. Creates default if None.
        runtime: Pre-wired runtime (tests). Built from settings if None.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings()
    if runtime is None:
        runtime = SearchRuntime(settings)

    app = FastAPI(
        title="Wave Search",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/v1/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/api/v1/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.runtime = runtime

    app.add_middleware(RequestLoggingMiddleware)
    if settings.key:
        app.add_middleware(APIKeyMiddleware, api_key=settings.key)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(search.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
