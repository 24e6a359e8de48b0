"""Shared test fixtures and configuration for the Event Recipes service tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest


# Must be set before any settings are loaded
os.environ["APP_ENV"] = "test"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-minimum-32-characters-long")

from event_recipes.auth.providers import set_auth_provider  # noqa: E402
from event_recipes.core.config import get_settings  # noqa: E402
from event_recipes.observability.logging import clear_context  # noqa: E402


if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None]:
    """Clear cached settings, the auth provider, and the log context."""
    get_settings.cache_clear()
    clear_context()
    yield
    set_auth_provider(None)
    get_settings.cache_clear()
    clear_context()
