"""Unit tests for application factory.

Tests cover:
- create_app function
- Middleware setup
- Router setup
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI

from event_recipes.factory import _setup_middleware, _setup_routers, create_app
from tests.factories.settings import SettingsFactory


pytestmark = pytest.mark.unit


class TestCreateApp:
    """Tests for create_app function."""

    def test_creates_fastapi_instance(self) -> None:
        """Should create a FastAPI instance titled after the app."""
        settings = SettingsFactory.build()

        app = create_app(settings)

        assert isinstance(app, FastAPI)
        assert app.title == "Test Event Recipes"
        assert app.version == "0.0.1-test"

    def test_stores_settings_and_empty_pool(self) -> None:
        """Should store settings and an unset pool in app state."""
        settings = SettingsFactory.build()

        app = create_app(settings)

        assert app.state.settings is settings
        assert app.state.db_pool is None

    @pytest.mark.parametrize("env", ["production", "staging"])
    def test_disables_docs_outside_non_production(self, env: str) -> None:
        """Should disable docs endpoints in production-like environments."""
        app = create_app(SettingsFactory.build(APP_ENV=env))

        assert app.docs_url is None
        assert app.redoc_url is None
        assert app.openapi_url is None

    @pytest.mark.parametrize("env", ["local", "test", "development"])
    def test_enables_docs_under_prefix(self, env: str) -> None:
        """Should serve docs under the API prefix."""
        app = create_app(SettingsFactory.build(APP_ENV=env))

        assert app.docs_url == "/api/v1/docs"
        assert app.redoc_url == "/api/v1/redoc"
        assert app.openapi_url == "/api/v1/openapi.json"

    def test_uses_default_settings_when_none_provided(self) -> None:
        """Should use get_settings when no settings provided."""
        settings = SettingsFactory.build(app={"name": "From Cache"})

        with patch("event_recipes.factory.get_settings", return_value=settings):
            app = create_app()

        assert app.title == "From Cache"

    def test_configures_metrics(self) -> None:
        """Should hand the settings to the metrics setup."""
        settings = SettingsFactory.build()

        with patch("event_recipes.factory.setup_metrics") as mock_metrics:
            app = create_app(settings)

        mock_metrics.assert_called_once_with(app, settings)


class TestSetupMiddleware:
    """Tests for _setup_middleware function."""

    def test_adds_middleware_without_cors(self) -> None:
        """Should add logging, timing and request ID middleware."""
        app = FastAPI()
        mock_settings = MagicMock()
        mock_settings.api.cors_origins = []
        mock_settings.api.v1_prefix = "/api/v1"

        _setup_middleware(app, mock_settings)

        assert len(app.user_middleware) == 3

    def test_adds_cors_middleware_when_origins_set(self) -> None:
        """Should add CORS middleware when origins configured."""
        app = FastAPI()
        mock_settings = MagicMock()
        mock_settings.api.cors_origins = ["http://localhost:5173"]
        mock_settings.api.v1_prefix = "/api/v1"

        _setup_middleware(app, mock_settings)

        assert len(app.user_middleware) == 4


class TestSetupRouters:
    """Tests for _setup_routers function."""

    def test_mounts_routes(self) -> None:
        """Should mount the event and health routes under the prefix."""
        app = FastAPI()
        mock_settings = MagicMock()
        mock_settings.api.v1_prefix = "/api/v1"

        _setup_routers(app, mock_settings)

        paths = {r.path for r in app.routes if hasattr(r, "path")}
        assert {
            "/",
            "/api/v1/health",
            "/api/v1/ready",
            "/api/v1/events",
            "/api/v1/events/{event_id}",
            "/api/v1/events/{event_id}/recipes",
            "/api/v1/events/{event_id}/recipes/{meal_id}",
            "/api/v1/events/{event_id}/custom-recipes",
            "/api/v1/events/{event_id}/custom-recipes/{recipe_id}",
        } <= paths
