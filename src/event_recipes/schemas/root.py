"""Root and health endpoint response schemas."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from event_recipes.schemas.base import APIResponse


class RootResponse(APIResponse):
    """Basic service information."""

    service: str = Field(..., examples=["Event Recipes Service"])
    version: str = Field(..., examples=["0.1.0"])
    status: str = Field(..., examples=["operational"])
    docs: str = Field(..., examples=["/api/v1/docs"])
    health: str = Field(..., examples=["/api/v1/health"])


class HealthResponse(APIResponse):
    """Liveness probe response."""

    status: str = Field(..., examples=["healthy"])
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    version: str
    environment: str


class ReadinessResponse(HealthResponse):
    """Readiness probe response with dependency status."""

    dependencies: dict[str, str] = Field(default_factory=dict)
