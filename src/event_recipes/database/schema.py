"""Table bootstrap for the events and recipes tables.

Statements are idempotent; they run at startup when
``database.create_schema`` is enabled. Schema evolution beyond this
initial shape is out of scope.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from event_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)

# Largest value a SERIAL (int4) id column can hold
MAX_ROW_ID = 2**31 - 1

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS events (
        id SERIAL PRIMARY KEY,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        date DATE NOT NULL,
        description TEXT,
        location TEXT,
        image_url TEXT DEFAULT '',
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    "CREATE INDEX IF NOT EXISTS events_user_id_idx ON events (user_id)",
    """
    CREATE TABLE IF NOT EXISTS recipes (
        id SERIAL PRIMARY KEY,
        event_id INTEGER NOT NULL REFERENCES events (id) ON DELETE CASCADE,
        user_id TEXT NOT NULL,
        meal_id TEXT,
        title TEXT NOT NULL,
        image TEXT,
        ingredients TEXT NOT NULL DEFAULT '',
        instructions TEXT,
        is_custom BOOLEAN NOT NULL DEFAULT FALSE,
        category TEXT,
        area TEXT,
        tags TEXT,
        youtube TEXT,
        source TEXT,
        meal_data JSONB,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    # NULL meal_ids (custom recipes) never collide
    """
    CREATE UNIQUE INDEX IF NOT EXISTS recipes_event_meal_unique
        ON recipes (event_id, meal_id)
    """,
)


async def ensure_schema(pool: Pool) -> None:
    """Create tables and indexes that do not exist yet."""
    async with pool.acquire() as conn, conn.transaction():
        for statement in SCHEMA_STATEMENTS:
            await conn.execute(statement)
    logger.info("Database schema ensured", statements=len(SCHEMA_STATEMENTS))
