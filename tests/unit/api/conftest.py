"""API test fixtures.

The application is built with test settings, header authentication and
the in-memory repositories, and driven through httpx without running the
lifespan.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from event_recipes.api.dependencies import get_event_service
from event_recipes.auth.providers import HeaderAuthProvider, set_auth_provider
from event_recipes.core.config import get_settings
from event_recipes.factory import create_app
from event_recipes.services.events import EventService
from tests.factories.database import (
    FakeDatabase,
    FakeEventRepository,
    FakeRecipeRepository,
    seed_event,
)
from tests.factories.settings import SettingsFactory


if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

    from event_recipes.core.config import Settings


@pytest.fixture
def settings() -> Settings:
    """Test settings with header authentication."""
    return SettingsFactory.build()


@pytest.fixture
def fake_db() -> FakeDatabase:
    """Create an empty in-memory database."""
    return FakeDatabase()


@pytest.fixture
def seeded_event(fake_db: FakeDatabase) -> dict[str, Any]:
    """Insert event 10 owned by user-1."""
    return seed_event(fake_db)


@pytest.fixture
def app(settings: Settings, fake_db: FakeDatabase) -> FastAPI:
    """Create the application wired to the in-memory repositories."""
    application = create_app(settings)
    application.state.db_pool = MagicMock()

    def _service() -> EventService:
        return EventService(
            MagicMock(),
            events=FakeEventRepository(fake_db),  # type: ignore[arg-type]
            recipes=FakeRecipeRepository(fake_db),  # type: ignore[arg-type]
        )

    application.dependency_overrides[get_event_service] = _service
    application.dependency_overrides[get_settings] = lambda: settings
    set_auth_provider(HeaderAuthProvider())
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """HTTP client authenticated as user-1."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-User-ID": "user-1"},
    ) as http_client:
        yield http_client
