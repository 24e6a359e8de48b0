"""PostgreSQL connection pool management.

This module provides:
- Creation and teardown of the asyncpg pool, driven by the lifespan
- A health probe used by the readiness endpoint

The pool itself lives on ``app.state.db_pool`` and is handed to
repositories through API dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg

from event_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

    from event_recipes.core.config import Settings

logger = get_logger(__name__)


async def create_database_pool(settings: Settings) -> Pool:
    """Create and verify a PostgreSQL connection pool.

    Should be called during application startup (lifespan).

    Args:
        settings: Application settings.

    Returns:
        A connected asyncpg pool.

    Raises:
        asyncpg.PostgresError: If the database cannot be reached.
    """
    db = settings.database

    logger.info(
        "Initializing database connection pool",
        host=db.host,
        port=db.port,
        database=db.name,
    )

    pool = await asyncpg.create_pool(
        host=db.host,
        port=db.port,
        database=db.name,
        user=db.user,
        password=settings.DATABASE_PASSWORD or None,
        min_size=db.min_pool_size,
        max_size=db.max_pool_size,
        command_timeout=db.command_timeout,
        ssl=db.ssl if db.ssl else None,
    )

    try:
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
        logger.info("Database connection established successfully")
    except asyncpg.PostgresError:
        logger.exception("Failed to connect to database")
        await pool.close()
        raise

    return pool


async def close_database_pool(pool: Pool | None) -> None:
    """Close a PostgreSQL connection pool.

    Should be called during application shutdown (lifespan).
    """
    if pool is None:
        return

    logger.info("Closing database connection pool")
    await pool.close()
    logger.info("Database connection pool closed")


async def check_database_health(pool: Pool | None) -> dict[str, str]:
    """Check health of the database connection.

    Returns:
        Dictionary with health status.
    """
    results: dict[str, str] = {}

    if pool is None:
        results["database"] = "not_initialized"
        return results

    try:
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
        results["database"] = "healthy"
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
        logger.warning("Database health check failed", error=str(e))
        results["database"] = "unhealthy"

    return results
