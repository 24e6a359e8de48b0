"""Event service package."""

from event_recipes.services.events.exceptions import (
    DuplicateRecipeError,
    EventNotFoundError,
    RecipeValidationError,
)
from event_recipes.services.events.service import EventService


__all__ = [
    "DuplicateRecipeError",
    "EventNotFoundError",
    "EventService",
    "RecipeValidationError",
]
