"""Recipe data repository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson

from event_recipes.database.repositories.base import BaseRepository, rows_affected
from event_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Mapping

    from asyncpg import Connection

logger = get_logger(__name__)


class RecipeRepository(BaseRepository):
    """Repository for recipes attached to events."""

    async def meal_exists(
        self,
        event_id: int,
        meal_id: str,
        *,
        conn: Connection | None = None,
    ) -> bool:
        """Check whether an external recipe is already attached to an event."""
        query = "SELECT 1 FROM recipes WHERE event_id = $1 AND meal_id = $2"
        async with self.connection(conn) as c:
            found = await c.fetchval(query, event_id, meal_id)
        return found is not None

    async def insert(
        self,
        event_id: int,
        user_id: str,
        *,
        title: str,
        ingredients: str,
        meal_id: str | None = None,
        image: str | None = None,
        instructions: str | None = None,
        is_custom: bool = False,
        category: str | None = None,
        area: str | None = None,
        tags: str | None = None,
        youtube: str | None = None,
        source: str | None = None,
        meal_data: Mapping[str, Any] | None = None,
        conn: Connection | None = None,
    ) -> int:
        """Insert a recipe row.

        ``meal_data`` is stored verbatim as JSONB.

        Returns:
            The new recipe id.

        Raises:
            asyncpg.UniqueViolationError: If ``meal_id`` is already on the event.
        """
        query = """
            INSERT INTO recipes (
                event_id, user_id, meal_id, title, image, ingredients,
                instructions, is_custom, category, area, tags, youtube,
                source, meal_data
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14::jsonb)
            RETURNING id
        """
        payload = orjson.dumps(meal_data).decode() if meal_data is not None else None

        async with self.connection(conn) as c:
            recipe_id = await c.fetchval(
                query,
                event_id,
                user_id,
                meal_id,
                title,
                image,
                ingredients,
                instructions,
                is_custom,
                category,
                area,
                tags,
                youtube,
                source,
                payload,
            )

        logger.info(
            "Recipe attached",
            event_id=event_id,
            recipe_id=recipe_id,
            meal_id=meal_id,
            is_custom=is_custom,
        )
        return recipe_id

    async def delete_by_meal_id(
        self,
        event_id: int,
        meal_id: str,
        *,
        conn: Connection | None = None,
    ) -> int:
        """Remove an external recipe from an event. Returns rows removed."""
        query = "DELETE FROM recipes WHERE event_id = $1 AND meal_id = $2"
        async with self.connection(conn) as c:
            status = await c.execute(query, event_id, meal_id)
        return rows_affected(status)

    async def delete_custom(
        self,
        event_id: int,
        recipe_id: int,
        *,
        conn: Connection | None = None,
    ) -> int:
        """Remove a user-authored recipe by row id. Returns rows removed."""
        query = """
            DELETE FROM recipes
            WHERE event_id = $1 AND id = $2 AND is_custom
        """
        async with self.connection(conn) as c:
            status = await c.execute(query, event_id, recipe_id)
        return rows_affected(status)

    async def delete_for_event(
        self,
        event_id: int,
        *,
        conn: Connection | None = None,
    ) -> int:
        """Remove every recipe attached to an event. Returns rows removed."""
        query = "DELETE FROM recipes WHERE event_id = $1"
        async with self.connection(conn) as c:
            status = await c.execute(query, event_id)
        return rows_affected(status)
