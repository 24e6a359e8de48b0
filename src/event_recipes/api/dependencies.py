"""FastAPI dependencies for service access.

The database pool is created during application startup and stored in
``app.state``; services are built per request on top of it.
"""

from __future__ import annotations

from typing import Annotated

from asyncpg import Pool  # noqa: TC002
from fastapi import Depends, HTTPException, Request, status

from event_recipes.services.events import EventService


async def get_db_pool(request: Request) -> Pool:
    """Get the database pool from app state.

    Raises:
        HTTPException: 503 if the pool is not initialized.
    """
    pool: Pool | None = getattr(request.app.state, "db_pool", None)
    if pool is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not available",
        )
    return pool


async def get_event_service(
    pool: Annotated[Pool, Depends(get_db_pool)],
) -> EventService:
    """Get an event service bound to the database pool."""
    return EventService(pool)
