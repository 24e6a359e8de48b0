"""Event endpoints.

Provides:
- CRUD for the caller's events under /events
- Attaching and detaching catalog and custom recipes on an event

Every route requires an authenticated user and only ever sees that
user's events; a foreign event answers 404.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from event_recipes.api.dependencies import get_event_service
from event_recipes.auth.dependencies import CurrentUser, get_current_user
from event_recipes.schemas.event import (
    EventCreateRequest,
    EventResponse,
    EventUpdateRequest,
    MessageResponse,
)
from event_recipes.schemas.recipe import CustomRecipeRequest, ImportRecipeRequest
from event_recipes.services.events import EventService


router = APIRouter(prefix="/events", tags=["Events"])

User = Annotated[CurrentUser, Depends(get_current_user)]
Service = Annotated[EventService, Depends(get_event_service)]
EventId = Annotated[int, Path(description="Event identifier", ge=1)]

_NOT_FOUND = {404: {"description": "Event not found"}}


@router.get(
    "",
    response_model=list[EventResponse],
    summary="List events",
    description="List the caller's events, newest date first, with their recipes.",
)
async def list_events(user: User, service: Service) -> list[EventResponse]:
    """List the caller's events."""
    return await service.list_events(user.id)


@router.post(
    "",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an event",
)
async def create_event(
    body: EventCreateRequest,
    user: User,
    service: Service,
) -> EventResponse:
    """Create an event owned by the caller."""
    return await service.create_event(user.id, body)


@router.get(
    "/{event_id}",
    response_model=EventResponse,
    summary="Get an event",
    responses=_NOT_FOUND,
)
async def get_event(
    event_id: EventId,
    user: User,
    service: Service,
) -> EventResponse:
    """Get one of the caller's events with its recipes."""
    return await service.get_event(event_id, user.id)


@router.put(
    "/{event_id}",
    response_model=EventResponse,
    summary="Update an event",
    description="Update the provided fields; omitted fields keep their value.",
    responses=_NOT_FOUND,
)
async def update_event(
    event_id: EventId,
    body: EventUpdateRequest,
    user: User,
    service: Service,
) -> EventResponse:
    """Update one of the caller's events."""
    return await service.update_event(event_id, user.id, body)


@router.delete(
    "/{event_id}",
    response_model=MessageResponse,
    summary="Delete an event",
    description="Delete an event together with every recipe attached to it.",
    responses=_NOT_FOUND,
)
async def delete_event(
    event_id: EventId,
    user: User,
    service: Service,
) -> MessageResponse:
    """Delete one of the caller's events."""
    await service.delete_event(event_id, user.id)
    return MessageResponse(message="Event deleted")


@router.post(
    "/{event_id}/recipes",
    response_model=EventResponse,
    summary="Attach a catalog recipe",
    description=(
        "Attach a recipe from the external catalog. The full payload is kept "
        "so the recipe can be shown later without calling the catalog again."
    ),
    responses={
        400: {"description": "idMeal or strMeal missing"},
        404: {"description": "Event not found"},
        409: {"description": "Recipe already attached to the event"},
    },
)
async def add_recipe(
    event_id: EventId,
    body: ImportRecipeRequest,
    user: User,
    service: Service,
) -> EventResponse:
    """Attach a catalog recipe and return the updated event."""
    return await service.add_recipe(event_id, user.id, body.recipe)


@router.delete(
    "/{event_id}/recipes/{meal_id}",
    response_model=EventResponse,
    summary="Detach a catalog recipe",
    description="Detach a catalog recipe by its external id. Unknown ids are ignored.",
    responses=_NOT_FOUND,
)
async def remove_recipe(
    event_id: EventId,
    meal_id: Annotated[str, Path(description="External catalog identifier")],
    user: User,
    service: Service,
) -> EventResponse:
    """Detach a catalog recipe and return the updated event."""
    return await service.remove_recipe(event_id, user.id, meal_id)


@router.post(
    "/{event_id}/custom-recipes",
    response_model=EventResponse,
    summary="Attach a custom recipe",
    responses=_NOT_FOUND,
)
async def add_custom_recipe(
    event_id: EventId,
    body: CustomRecipeRequest,
    user: User,
    service: Service,
) -> EventResponse:
    """Attach a user-authored recipe and return the updated event."""
    return await service.add_custom_recipe(event_id, user.id, body)


@router.delete(
    "/{event_id}/custom-recipes/{recipe_id}",
    response_model=EventResponse,
    summary="Detach a custom recipe",
    responses=_NOT_FOUND,
)
async def remove_custom_recipe(
    event_id: EventId,
    recipe_id: Annotated[int, Path(description="Recipe identifier", ge=1)],
    user: User,
    service: Service,
) -> EventResponse:
    """Detach a user-authored recipe and return the updated event."""
    return await service.remove_custom_recipe(event_id, user.id, recipe_id)
