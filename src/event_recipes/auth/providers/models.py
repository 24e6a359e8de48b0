"""Authentication provider models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AuthResult(BaseModel):
    """Result of successful token validation.

    Whatever provider validated the token, the rest of the service only
    relies on ``user_id``: it is the opaque key that owns events and recipes.
    """

    user_id: str = Field(..., description="User identifier from token 'sub' claim")
    roles: list[str] = Field(default_factory=list, description="User roles")
    scopes: list[str] = Field(default_factory=list, description="OAuth2 scopes")
    token_type: str = Field(default="access", description="Type of validated token")
    issuer: str | None = Field(default=None, description="Token issuer")
    expires_at: int | None = Field(default=None, description="Expiration timestamp")
    raw_claims: dict[str, Any] = Field(
        default_factory=dict,
        description="Original token claims",
    )

    model_config = {"frozen": True}


class IntrospectionResponse(BaseModel):
    """Response from an OAuth2 token introspection endpoint (RFC 7662)."""

    active: bool
    sub: str | None = None
    scope: str | None = None
    client_id: str | None = None
    token_type: str | None = None
    exp: int | None = None
    iat: int | None = None
    iss: str | None = None

    @property
    def scopes(self) -> list[str]:
        """Parse scope string into list."""
        if not self.scope:
            return []
        return self.scope.split()
