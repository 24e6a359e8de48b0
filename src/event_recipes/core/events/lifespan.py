"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: logging, database pool, schema bootstrap, auth provider
- Application shutdown: auth provider and database pool teardown
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from event_recipes.auth.providers import (
    initialize_auth_provider,
    shutdown_auth_provider,
)
from event_recipes.core.config import Settings, get_settings
from event_recipes.database.connection import (
    close_database_pool,
    create_database_pool,
)
from event_recipes.database.schema import ensure_schema
from event_recipes.observability.logging import get_logger, setup_logging


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application resources during startup."""
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # Database is critical - startup fails without it
    pool = await create_database_pool(settings)
    app.state.db_pool = pool

    # Pool is closed again if anything after it fails
    try:
        if settings.database.create_schema:
            await ensure_schema(pool)

        await initialize_auth_provider(settings)
        logger.info("Auth provider initialized", mode=settings.auth.mode)
    except Exception:
        logger.exception("Failed to initialize application resources")
        await close_database_pool(pool)
        app.state.db_pool = None
        raise


async def _shutdown(app: FastAPI) -> None:
    """Release all application resources."""
    logger.info("Shutting down application")

    await shutdown_auth_provider()

    await close_database_pool(getattr(app.state, "db_pool", None))
    app.state.db_pool = None

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Settings come from ``app.state.settings`` when the factory stored them.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
