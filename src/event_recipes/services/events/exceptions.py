"""Exceptions for the event service.

Each one is an ``AppError``, so the registered exception handlers render
it with the right status code.
"""

from __future__ import annotations

from event_recipes.core.exceptions import (
    BadRequestError,
    ConflictError,
    ErrorDetail,
    NotFoundError,
)


class EventNotFoundError(NotFoundError):
    """Raised when an event does not exist or belongs to another user."""

    def __init__(self, event_id: int) -> None:
        self.event_id = event_id
        super().__init__("Event", event_id)


class DuplicateRecipeError(ConflictError):
    """Raised when an external recipe is already attached to the event."""

    def __init__(self, event_id: int, meal_id: str) -> None:
        self.event_id = event_id
        self.meal_id = meal_id
        super().__init__(f"Recipe '{meal_id}' is already attached to this event")


class RecipeValidationError(BadRequestError):
    """Raised when an imported recipe lacks its required fields."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            "Recipe payload is missing required fields",
            details=[
                ErrorDetail(code="MISSING_FIELD", message=f"{name} is required", field=name)
                for name in missing
            ],
        )
