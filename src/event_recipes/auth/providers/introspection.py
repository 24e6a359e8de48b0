"""Introspection-based authentication provider.

Validates tokens by asking the identity provider's introspection endpoint
(RFC 7662). This is the production mode: the service never sees signing keys.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from event_recipes.auth.client.auth_service import AuthServiceClient
from event_recipes.auth.providers.exceptions import (
    AuthServiceUnavailableError,
    ConfigurationError,
    TokenInvalidError,
)
from event_recipes.auth.providers.models import AuthResult
from event_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    import httpx
    from starlette.requests import Request

    from event_recipes.auth.providers.protocol import AuthProvider

logger = get_logger(__name__)


class IntrospectionAuthProvider:
    """Validates tokens via the identity provider's introspection endpoint.

    When ``fallback_provider`` is set and the identity provider cannot be
    reached, validation is delegated to it instead of failing.
    """

    def __init__(
        self,
        base_url: str,
        client_id: str,
        client_secret: str,
        timeout: float = 5.0,
        fallback_provider: AuthProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not all([base_url, client_id, client_secret]):
            msg = (
                "IntrospectionAuthProvider requires base_url, client_id, "
                "and client_secret"
            )
            raise ConfigurationError(msg)

        self.auth_client = AuthServiceClient(
            base_url=base_url,
            client_id=client_id,
            client_secret=client_secret,
            timeout=timeout,
            transport=transport,
        )
        self.fallback_provider = fallback_provider

    @property
    def provider_name(self) -> str:
        """Return provider name for logging."""
        return "introspection"

    async def validate_token(
        self,
        token: str,
        _request: Request | None = None,
    ) -> AuthResult:
        """Validate token via the introspection endpoint.

        Raises:
            TokenInvalidError: If the token is inactive or has no subject.
            AuthServiceUnavailableError: If the identity provider cannot be
                reached and no fallback is configured.
        """
        try:
            response = await self.auth_client.introspect_token(token)
        except AuthServiceUnavailableError:
            if self.fallback_provider:
                logger.warning(
                    "Identity provider unavailable, using fallback provider",
                    fallback=self.fallback_provider.provider_name,
                )
                return await self.fallback_provider.validate_token(token, _request)
            raise

        if not response.active:
            msg = "Token is not active"
            raise TokenInvalidError(msg)

        if not response.sub:
            msg = "Token introspection missing 'sub' claim"
            raise TokenInvalidError(msg)

        return AuthResult(
            user_id=response.sub,
            scopes=response.scopes,
            token_type=response.token_type or "access",
            issuer=response.iss,
            expires_at=response.exp,
            raw_claims={
                "active": response.active,
                "client_id": response.client_id,
                "scope": response.scope,
            },
        )

    async def initialize(self) -> None:
        """Initialize the HTTP client and the optional fallback."""
        await self.auth_client.initialize()

        if self.fallback_provider:
            await self.fallback_provider.initialize()

        logger.info(
            "IntrospectionAuthProvider initialized",
            fallback=self.fallback_provider.provider_name
            if self.fallback_provider
            else None,
        )

    async def shutdown(self) -> None:
        """Close connections."""
        await self.auth_client.shutdown()

        if self.fallback_provider:
            await self.fallback_provider.shutdown()
