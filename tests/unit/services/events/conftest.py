"""Event service fixtures."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from event_recipes.services.events import EventService
from tests.factories.database import (
    FakeDatabase,
    FakeEventRepository,
    FakeRecipeRepository,
    seed_event,
)


@pytest.fixture
def fake_db() -> FakeDatabase:
    """Create an empty in-memory database."""
    return FakeDatabase()


@pytest.fixture
def event_repository(fake_db: FakeDatabase) -> FakeEventRepository:
    """Create the in-memory event repository."""
    return FakeEventRepository(fake_db)


@pytest.fixture
def recipe_repository(fake_db: FakeDatabase) -> FakeRecipeRepository:
    """Create the in-memory recipe repository."""
    return FakeRecipeRepository(fake_db)


@pytest.fixture
def service(
    event_repository: FakeEventRepository,
    recipe_repository: FakeRecipeRepository,
) -> EventService:
    """Create EventService over the in-memory repositories."""
    return EventService(
        MagicMock(),
        events=event_repository,  # type: ignore[arg-type]
        recipes=recipe_repository,  # type: ignore[arg-type]
    )


@pytest.fixture
def seeded_event(fake_db: FakeDatabase) -> dict[str, Any]:
    """Insert event 10 owned by user-1."""
    return seed_event(fake_db)
