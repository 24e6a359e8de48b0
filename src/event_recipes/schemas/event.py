"""Event schemas.

Event responses use snake_case keys and expose the event name twice,
as ``title`` and ``name``, for compatibility with existing clients.
"""

from __future__ import annotations

import datetime as dt
from typing import Annotated, Any

from pydantic import BeforeValidator, Field, model_validator

from event_recipes.schemas.base import APIRequest, APIResponse
from event_recipes.schemas.recipe import RecipeView


def _date_part(value: Any) -> Any:
    """Accept full ISO datetimes by keeping only their date part."""
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


EventDate = Annotated[dt.date, BeforeValidator(_date_part)]


class EventCreateRequest(APIRequest):
    """Create an event. ``title`` is accepted as a synonym for ``name``."""

    name: str | None = Field(default=None, max_length=255, examples=["Sunday brunch"])
    title: str | None = Field(default=None, max_length=255)
    date: EventDate = Field(..., examples=["2025-06-01"])
    description: str | None = None
    location: str | None = None
    image_url: str | None = Field(default=None, alias="image_url")

    @model_validator(mode="after")
    def _require_name(self) -> EventCreateRequest:
        name = (self.name or self.title or "").strip()
        if not name:
            msg = "Event name is required"
            raise ValueError(msg)
        self.name = name
        return self


class EventUpdateRequest(APIRequest):
    """Update an event. Omitted fields keep their stored value."""

    name: str | None = Field(default=None, max_length=255)
    title: str | None = Field(default=None, max_length=255)
    date: EventDate | None = None
    description: str | None = None
    location: str | None = None
    image_url: str | None = Field(default=None, alias="image_url")

    @property
    def resolved_name(self) -> str | None:
        """The new name, from either ``name`` or ``title``."""
        name = (self.name or self.title or "").strip()
        return name or None


class EventResponse(APIResponse):
    """An event with every recipe attached to it."""

    id: int
    title: str
    name: str
    date: dt.date | None = None
    description: str | None = None
    location: str | None = None
    image_url: str | None = Field(default=None, alias="image_url")
    created_at: dt.datetime | None = Field(default=None, alias="created_at")
    recipes: list[RecipeView] = Field(default_factory=list)


class MessageResponse(APIResponse):
    """Plain acknowledgement."""

    message: str
