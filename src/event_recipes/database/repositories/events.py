"""Event data repository.

Every query is scoped by ``user_id``: an event owned by someone else is
indistinguishable from one that does not exist.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from event_recipes.database.repositories.base import BaseRepository, rows_affected
from event_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    import datetime as dt

    from asyncpg import Connection, Record

logger = get_logger(__name__)

# One round trip for events plus their recipes; events without recipes
# get an empty array rather than [null].
_EVENTS_WITH_RECIPES = """
    SELECT
        e.id,
        e.name,
        e.date,
        e.description,
        e.location,
        e.image_url,
        e.created_at,
        COALESCE(
            json_agg(r ORDER BY r.id) FILTER (WHERE r.id IS NOT NULL),
            '[]'::json
        ) AS recipes
    FROM events e
    LEFT JOIN recipes r ON r.event_id = e.id
    WHERE {where}
    GROUP BY e.id
    ORDER BY e.date DESC, e.id DESC
"""


class EventRepository(BaseRepository):
    """Repository for events, using raw asyncpg queries."""

    async def list_with_recipes(self, user_id: str) -> list[Record]:
        """List a user's events, newest date first, with aggregated recipes."""
        query = _EVENTS_WITH_RECIPES.format(where="e.user_id = $1")
        async with self.connection() as conn:
            rows = await conn.fetch(query, user_id)

        logger.debug("Listed events", user_id=user_id, count=len(rows))
        return list(rows)

    async def get_with_recipes(
        self,
        event_id: int,
        user_id: str,
        *,
        conn: Connection | None = None,
    ) -> Record | None:
        """Fetch one of a user's events with aggregated recipes."""
        query = _EVENTS_WITH_RECIPES.format(where="e.id = $1 AND e.user_id = $2")
        async with self.connection(conn) as c:
            return await c.fetchrow(query, event_id, user_id)

    async def lock_owned(
        self,
        event_id: int,
        user_id: str,
        *,
        conn: Connection | None = None,
    ) -> bool:
        """Check ownership, locking the event row for the current transaction."""
        query = "SELECT id FROM events WHERE id = $1 AND user_id = $2 FOR UPDATE"
        async with self.connection(conn) as c:
            found = await c.fetchval(query, event_id, user_id)
        return found is not None

    async def create(
        self,
        user_id: str,
        *,
        name: str,
        date: dt.date,
        description: str | None = None,
        location: str | None = None,
        image_url: str | None = None,
    ) -> Record:
        """Insert an event and return its row."""
        query = """
            INSERT INTO events (user_id, name, date, description, location, image_url)
            VALUES ($1, $2, $3, $4, $5, COALESCE($6, ''))
            RETURNING id, name, date, description, location, image_url, created_at
        """
        async with self.connection() as conn:
            row = await conn.fetchrow(
                query, user_id, name, date, description, location, image_url
            )

        logger.info("Event created", event_id=row["id"], user_id=user_id)
        return row

    async def update(
        self,
        event_id: int,
        user_id: str,
        *,
        name: str | None = None,
        date: dt.date | None = None,
        description: str | None = None,
        location: str | None = None,
        image_url: str | None = None,
    ) -> bool:
        """Update the provided fields of an event.

        Returns:
            True when the event exists and belongs to the user.
        """
        query = """
            UPDATE events SET
                name = COALESCE($3, name),
                date = COALESCE($4, date),
                description = COALESCE($5, description),
                location = COALESCE($6, location),
                image_url = COALESCE($7, image_url)
            WHERE id = $1 AND user_id = $2
            RETURNING id
        """
        async with self.connection() as conn:
            updated = await conn.fetchval(
                query,
                event_id,
                user_id,
                name,
                date,
                description,
                location,
                image_url,
            )
        return updated is not None

    async def delete(
        self,
        event_id: int,
        user_id: str,
        *,
        conn: Connection | None = None,
    ) -> bool:
        """Delete an event. Returns True when a row was removed."""
        query = "DELETE FROM events WHERE id = $1 AND user_id = $2"
        async with self.connection(conn) as c:
            status = await c.execute(query, event_id, user_id)
        return rows_affected(status) > 0
