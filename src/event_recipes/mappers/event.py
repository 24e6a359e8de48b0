"""Event record mappers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import orjson

from event_recipes.mappers.recipe import reconstruct_recipe
from event_recipes.observability.logging import get_logger
from event_recipes.schemas.event import EventResponse
from event_recipes.schemas.recipe import RecipeView


logger = get_logger(__name__)


def _recipe_rows(aggregated: Any) -> list[Mapping[str, Any]]:
    """Decode the ``json_agg`` column into recipe row mappings.

    asyncpg returns ``json`` values as text unless a codec is registered,
    so both text and already-decoded lists are accepted.
    """
    if aggregated is None:
        return []
    if isinstance(aggregated, str | bytes):
        try:
            aggregated = orjson.loads(aggregated)
        except orjson.JSONDecodeError as e:
            logger.warning("Could not decode aggregated recipes", error=str(e))
            return []
    if not isinstance(aggregated, list):
        return []
    return [item for item in aggregated if isinstance(item, Mapping)]


def map_event_row(
    row: Mapping[str, Any],
    recipes: list[RecipeView] | None = None,
) -> EventResponse:
    """Build an EventResponse from an ``events`` row.

    Args:
        row: Event columns, optionally with a ``recipes`` json_agg column.
        recipes: Already reconstructed recipes. When omitted they are read
            from the row's aggregated ``recipes`` column.
    """
    if recipes is None:
        recipes = [reconstruct_recipe(r) for r in _recipe_rows(row.get("recipes"))]

    name = row["name"]
    return EventResponse.model_validate(
        {
            "id": row["id"],
            "title": name,
            "name": name,
            "date": row.get("date"),
            "description": row.get("description"),
            "location": row.get("location"),
            "image_url": row.get("image_url"),
            "created_at": row.get("created_at"),
            "recipes": recipes,
        }
    )


__all__ = ["map_event_row"]
