"""Unit tests for root endpoint.

Tests cover:
- Service name and version from settings
- Documentation URL based on environment
- Health endpoint URL based on API prefix
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from event_recipes.api.v1.endpoints.root import root
from event_recipes.schemas.root import RootResponse


pytestmark = pytest.mark.unit


def _settings(*, non_production: bool = True, prefix: str = "/api/v1") -> MagicMock:
    mock_settings = MagicMock()
    mock_settings.app.name = "Event Recipes Service"
    mock_settings.app.version = "0.1.0"
    mock_settings.is_non_production = non_production
    mock_settings.api.v1_prefix = prefix
    return mock_settings


class TestRootEndpoint:
    """Tests for root endpoint function."""

    @pytest.mark.asyncio
    async def test_returns_service_info(self) -> None:
        """Should return service name, version and status."""
        result = await root(_settings())

        assert isinstance(result, RootResponse)
        assert result.service == "Event Recipes Service"
        assert result.version == "0.1.0"
        assert result.status == "operational"

    @pytest.mark.asyncio
    async def test_docs_url_in_non_production(self) -> None:
        """Should point at the docs under the API prefix."""
        result = await root(_settings())

        assert result.docs == "/api/v1/docs"

    @pytest.mark.asyncio
    async def test_docs_disabled_in_production(self) -> None:
        """Should return disabled when in production environment."""
        result = await root(_settings(non_production=False))

        assert result.docs == "disabled"

    @pytest.mark.asyncio
    async def test_health_url_with_custom_prefix(self) -> None:
        """Should return health URL with custom API prefix."""
        result = await root(_settings(prefix="/api/v2/custom"))

        assert result.health == "/api/v2/custom/health"

    async def test_served_at_root(self, client) -> None:  # noqa: ANN001
        """Should be reachable outside the versioned prefix."""
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["service"] == "Test Event Recipes"
