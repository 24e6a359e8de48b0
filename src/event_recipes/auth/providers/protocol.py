"""Authentication provider protocol definition."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from starlette.requests import Request

    from event_recipes.auth.providers.models import AuthResult


@runtime_checkable
class AuthProvider(Protocol):
    """Protocol for authentication providers.

    A provider turns a bearer token (or, for header mode, the request) into
    an ``AuthResult``. Providers are created once at startup and shut down
    with the application.
    """

    @property
    def provider_name(self) -> str:
        """Return a short provider name for logging."""
        ...

    async def validate_token(
        self,
        token: str,
        request: Request | None = None,
    ) -> AuthResult:
        """Validate a token and return the authenticated user.

        Raises:
            TokenExpiredError: If the token has expired.
            TokenInvalidError: If the token is malformed or signature fails.
            AuthenticationError: For other authentication failures.
            AuthServiceUnavailableError: If the identity provider is unreachable.
        """
        ...

    async def initialize(self) -> None:
        """Prepare connections and validate configuration."""
        ...

    async def shutdown(self) -> None:
        """Release any held resources."""
        ...
