"""Event service.

Orchestrates the event and recipe repositories:
1. Ownership checks (every operation is scoped to the calling user)
2. Recipe import with duplicate protection inside one transaction
3. Reconstruction of stored rows into API responses
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import asyncpg

from event_recipes.database.repositories import EventRepository, RecipeRepository
from event_recipes.database.schema import MAX_ROW_ID
from event_recipes.mappers.event import map_event_row
from event_recipes.mappers.recipe import (
    build_custom_ingredients_string,
    build_ingredients_string,
)
from event_recipes.observability.logging import get_logger
from event_recipes.observability.metrics import (
    DUPLICATE_RECIPES_REJECTED,
    RECIPES_ATTACHED,
)
from event_recipes.services.events.exceptions import (
    DuplicateRecipeError,
    EventNotFoundError,
    RecipeValidationError,
)


if TYPE_CHECKING:
    from asyncpg import Pool

    from event_recipes.schemas.event import (
        EventCreateRequest,
        EventResponse,
        EventUpdateRequest,
    )
    from event_recipes.schemas.recipe import CustomRecipeRequest

logger = get_logger(__name__)

_REQUIRED_RECIPE_FIELDS = ("idMeal", "strMeal")


def _check_event_id(event_id: int) -> None:
    """Ids outside the id column range can never name a stored event."""
    if not 0 < event_id <= MAX_ROW_ID:
        raise EventNotFoundError(event_id)


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


class EventService:
    """Service for a user's events and the recipes attached to them."""

    def __init__(
        self,
        pool: Pool,
        events: EventRepository | None = None,
        recipes: RecipeRepository | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            pool: asyncpg pool shared by the repositories.
            events: Optional EventRepository instance.
            recipes: Optional RecipeRepository instance.
        """
        self._events = events or EventRepository(pool)
        self._recipes = recipes or RecipeRepository(pool)

    async def list_events(self, user_id: str) -> list[EventResponse]:
        """List the user's events, newest first, each with its recipes."""
        rows = await self._events.list_with_recipes(user_id)
        return [map_event_row(row) for row in rows]

    async def get_event(self, event_id: int, user_id: str) -> EventResponse:
        """Get one event with its recipes.

        Raises:
            EventNotFoundError: If the event is absent or not the user's.
        """
        _check_event_id(event_id)
        row = await self._events.get_with_recipes(event_id, user_id)
        if row is None:
            raise EventNotFoundError(event_id)
        return map_event_row(row)

    async def create_event(
        self, user_id: str, request: EventCreateRequest
    ) -> EventResponse:
        """Create an event. The response carries an empty recipe list."""
        row = await self._events.create(
            user_id,
            name=request.name or "",
            date=request.date,
            description=request.description,
            location=request.location,
            image_url=request.image_url,
        )
        return map_event_row(row, recipes=[])

    async def update_event(
        self,
        event_id: int,
        user_id: str,
        request: EventUpdateRequest,
    ) -> EventResponse:
        """Update the provided fields of an event.

        Raises:
            EventNotFoundError: If the event is absent or not the user's.
        """
        _check_event_id(event_id)
        updated = await self._events.update(
            event_id,
            user_id,
            name=request.resolved_name,
            date=request.date,
            description=request.description,
            location=request.location,
            image_url=request.image_url,
        )
        if not updated:
            raise EventNotFoundError(event_id)
        return await self.get_event(event_id, user_id)

    async def delete_event(self, event_id: int, user_id: str) -> None:
        """Delete an event and every recipe attached to it.

        Raises:
            EventNotFoundError: If the event is absent or not the user's.
        """
        _check_event_id(event_id)
        async with self._events.transaction() as conn:
            if not await self._events.lock_owned(event_id, user_id, conn=conn):
                raise EventNotFoundError(event_id)
            removed = await self._recipes.delete_for_event(event_id, conn=conn)
            await self._events.delete(event_id, user_id, conn=conn)

        logger.info("Event deleted", event_id=event_id, recipes_removed=removed)

    async def add_recipe(
        self,
        event_id: int,
        user_id: str,
        meal: dict[str, Any],
    ) -> EventResponse:
        """Attach an external catalog recipe to an event.

        The payload is stored verbatim next to the extracted columns.

        Raises:
            RecipeValidationError: If ``idMeal`` or ``strMeal`` is missing.
            EventNotFoundError: If the event is absent or not the user's.
            DuplicateRecipeError: If the recipe is already on the event.
        """
        _check_event_id(event_id)
        missing = [key for key in _REQUIRED_RECIPE_FIELDS if not meal.get(key)]
        if missing:
            raise RecipeValidationError(missing)

        meal_id = str(meal["idMeal"])

        try:
            async with self._events.transaction() as conn:
                if not await self._events.lock_owned(event_id, user_id, conn=conn):
                    raise EventNotFoundError(event_id)
                if await self._recipes.meal_exists(event_id, meal_id, conn=conn):
                    raise DuplicateRecipeError(event_id, meal_id)
                await self._recipes.insert(
                    event_id,
                    user_id,
                    meal_id=meal_id,
                    title=str(meal["strMeal"]),
                    image=_optional_text(meal.get("strMealThumb")),
                    ingredients=build_ingredients_string(meal),
                    instructions=_optional_text(meal.get("strInstructions")),
                    category=_optional_text(meal.get("strCategory")),
                    area=_optional_text(meal.get("strArea")),
                    tags=_optional_text(meal.get("strTags")),
                    youtube=_optional_text(meal.get("strYoutube")),
                    source=_optional_text(meal.get("strSource")),
                    meal_data=meal,
                    conn=conn,
                )
        except asyncpg.UniqueViolationError as e:
            DUPLICATE_RECIPES_REJECTED.inc()
            raise DuplicateRecipeError(event_id, meal_id) from e
        except DuplicateRecipeError:
            DUPLICATE_RECIPES_REJECTED.inc()
            raise

        RECIPES_ATTACHED.labels(kind="imported").inc()
        return await self.get_event(event_id, user_id)

    async def add_custom_recipe(
        self,
        event_id: int,
        user_id: str,
        request: CustomRecipeRequest,
    ) -> EventResponse:
        """Attach a user-authored recipe to an event.

        Raises:
            EventNotFoundError: If the event is absent or not the user's.
        """
        _check_event_id(event_id)
        async with self._events.transaction() as conn:
            if not await self._events.lock_owned(event_id, user_id, conn=conn):
                raise EventNotFoundError(event_id)
            await self._recipes.insert(
                event_id,
                user_id,
                title=request.title,
                image=request.image,
                ingredients=build_custom_ingredients_string(request.ingredients),
                instructions=request.instructions,
                is_custom=True,
                category=request.category,
                area=request.area,
                tags=request.tags,
                youtube=request.youtube,
                source=request.source,
                conn=conn,
            )

        RECIPES_ATTACHED.labels(kind="custom").inc()
        return await self.get_event(event_id, user_id)

    async def remove_recipe(
        self,
        event_id: int,
        user_id: str,
        meal_id: str,
    ) -> EventResponse:
        """Detach an external recipe. Unknown meal ids are not an error.

        Raises:
            EventNotFoundError: If the event is absent or not the user's.
        """
        _check_event_id(event_id)
        async with self._events.transaction() as conn:
            if not await self._events.lock_owned(event_id, user_id, conn=conn):
                raise EventNotFoundError(event_id)
            removed = await self._recipes.delete_by_meal_id(event_id, meal_id, conn=conn)

        logger.info(
            "Recipe removed from event",
            event_id=event_id,
            meal_id=meal_id,
            removed=removed,
        )
        return await self.get_event(event_id, user_id)

    async def remove_custom_recipe(
        self,
        event_id: int,
        user_id: str,
        recipe_id: int,
    ) -> EventResponse:
        """Detach a user-authored recipe by its row id.

        Raises:
            EventNotFoundError: If the event is absent or not the user's.
        """
        _check_event_id(event_id)
        async with self._events.transaction() as conn:
            if not await self._events.lock_owned(event_id, user_id, conn=conn):
                raise EventNotFoundError(event_id)
            removed = 0
            if recipe_id <= MAX_ROW_ID:
                removed = await self._recipes.delete_custom(
                    event_id, recipe_id, conn=conn
                )

        logger.info(
            "Custom recipe removed from event",
            event_id=event_id,
            recipe_id=recipe_id,
            removed=removed,
        )
        return await self.get_event(event_id, user_id)
