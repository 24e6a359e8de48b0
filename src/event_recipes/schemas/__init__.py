"""Pydantic schemas for request/response validation."""

from event_recipes.schemas.base import APIRequest, APIResponse
from event_recipes.schemas.event import (
    EventCreateRequest,
    EventResponse,
    EventUpdateRequest,
    MessageResponse,
)
from event_recipes.schemas.recipe import (
    CustomIngredient,
    CustomRecipeRequest,
    ImportRecipeRequest,
    RecipeView,
)
from event_recipes.schemas.root import (
    HealthResponse,
    ReadinessResponse,
    RootResponse,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "CustomIngredient",
    "CustomRecipeRequest",
    "EventCreateRequest",
    "EventResponse",
    "EventUpdateRequest",
    "HealthResponse",
    "ImportRecipeRequest",
    "MessageResponse",
    "ReadinessResponse",
    "RecipeView",
    "RootResponse",
]
