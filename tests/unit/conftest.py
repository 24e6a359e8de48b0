"""Unit test configuration.

Unit tests should be fast and isolated - no external dependencies.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest


# Mark all tests in this directory as unit tests
pytestmark = pytest.mark.unit


def _async_context(value: object) -> MagicMock:
    """Build an object usable with ``async with`` that yields ``value``."""
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=value)
    context.__aexit__ = AsyncMock(return_value=None)
    return context


@pytest.fixture
def mock_conn() -> MagicMock:
    """Create a mock asyncpg connection with transaction support."""
    conn = MagicMock()
    conn.fetch = AsyncMock(return_value=[])
    conn.fetchrow = AsyncMock(return_value=None)
    conn.fetchval = AsyncMock(return_value=None)
    conn.execute = AsyncMock(return_value="DELETE 0")
    conn.transaction = MagicMock(return_value=_async_context(None))
    return conn


@pytest.fixture
def mock_pool(mock_conn: MagicMock) -> MagicMock:
    """Create a mock asyncpg pool handing out ``mock_conn``."""
    pool = MagicMock()
    pool.close = AsyncMock()
    pool.acquire = MagicMock(return_value=_async_context(mock_conn))
    return pool
