"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Sets up middleware stack in the correct order
- Registers exception handlers
- Mounts API routers
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from event_recipes.api.v1.endpoints import root
from event_recipes.api.v1.router import router as v1_router
from event_recipes.core.config import Settings, get_settings
from event_recipes.core.events import lifespan
from event_recipes.core.exceptions import setup_exception_handlers
from event_recipes.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    TimingMiddleware,
)
from event_recipes.observability.metrics import setup_metrics


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    prefix = settings.api.v1_prefix
    docs_enabled = settings.is_non_production

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Plan events and attach catalog or custom recipes to them.",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url=f"{prefix}/docs" if docs_enabled else None,
        redoc_url=f"{prefix}/redoc" if docs_enabled else None,
        openapi_url=f"{prefix}/openapi.json" if docs_enabled else None,
        debug=settings.app.debug,
    )

    # Store settings in app state for access in routes
    app.state.settings = settings
    app.state.db_pool = None

    setup_exception_handlers(app)

    # Middleware (order matters - first added = last executed)
    _setup_middleware(app, settings)

    _setup_routers(app, settings)

    # After routes are mounted
    setup_metrics(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Order from request perspective:
    1. RequestIDMiddleware (adds request ID for correlation)
    2. TimingMiddleware (measures request time)
    3. LoggingMiddleware (logs requests/responses)
    4. CORSMiddleware (handles CORS)
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.api.cors_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    prefix = settings.api.v1_prefix
    app.add_middleware(
        LoggingMiddleware,
        exclude_paths={
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
            "/favicon.ico",
        },
    )

    app.add_middleware(TimingMiddleware)

    # Runs first on request
    app.add_middleware(RequestIDMiddleware)


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    """Mount API routers."""
    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    # Service info at the root, outside the versioned prefix
    app.include_router(root.router)
