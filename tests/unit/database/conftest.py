"""Database unit test fixtures.

``mock_pool`` and ``mock_conn`` come from the unit conftest.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.factories.settings import SettingsFactory


if TYPE_CHECKING:
    from event_recipes.core.config import Settings


pytestmark = pytest.mark.unit


@pytest.fixture
def db_settings() -> Settings:
    """Settings with a small local database configuration."""
    return SettingsFactory.build(
        database={
            "host": "localhost",
            "port": 5432,
            "name": "test",
            "user": "postgres",
            "min_pool_size": 1,
            "max_pool_size": 5,
        },
        DATABASE_PASSWORD="secret",
    )
