"""HTTP client for the external identity provider.

Only token introspection (RFC 7662) is needed: the service never issues
tokens itself.
"""

from __future__ import annotations

import httpx

from event_recipes.auth.providers.exceptions import AuthServiceUnavailableError
from event_recipes.auth.providers.models import IntrospectionResponse
from event_recipes.observability.logging import get_logger


logger = get_logger(__name__)


class AuthServiceClient:
    """Async HTTP client for the identity provider's introspection endpoint.

    Attributes:
        base_url: Base URL of the identity provider.
        client_id: OAuth2 client ID for this service.
        client_secret: OAuth2 client secret.
        timeout: HTTP request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        client_id: str,
        client_secret: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None

    @property
    def introspection_url(self) -> str:
        """Get the token introspection endpoint URL."""
        return f"{self.base_url}/oauth2/introspect"

    async def initialize(self) -> None:
        """Create the pooled HTTP client."""
        if self._http_client is not None:
            return

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
            transport=self._transport,
        )
        logger.info(
            "AuthServiceClient initialized",
            base_url=self.base_url,
            timeout=self.timeout,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client and release connections."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def introspect_token(
        self,
        token: str,
        token_type_hint: str = "access_token",  # noqa: S107
    ) -> IntrospectionResponse:
        """Introspect a token.

        Raises:
            AuthServiceUnavailableError: If the identity provider cannot be reached
                or answers with an error status.
        """
        if self._http_client is None:
            await self.initialize()

        assert self._http_client is not None

        try:
            response = await self._http_client.post(
                self.introspection_url,
                data={"token": token, "token_type_hint": token_type_hint},
                auth=httpx.BasicAuth(self.client_id, self.client_secret),
            )
            # RFC 7662: inactive tokens still answer 200 with {"active": false}
            response.raise_for_status()
            return IntrospectionResponse.model_validate(response.json())

        except httpx.TimeoutException as e:
            logger.warning(
                "Identity provider introspection timeout",
                url=self.introspection_url,
                timeout=self.timeout,
            )
            msg = f"Identity provider timeout after {self.timeout}s"
            raise AuthServiceUnavailableError(msg) from e

        except httpx.HTTPStatusError as e:
            logger.warning(
                "Identity provider introspection failed",
                status_code=e.response.status_code,
                url=self.introspection_url,
            )
            msg = f"Identity provider returned {e.response.status_code}"
            raise AuthServiceUnavailableError(msg) from e

        except httpx.RequestError as e:
            logger.warning(
                "Identity provider connection error",
                url=self.introspection_url,
                error=str(e),
            )
            msg = f"Cannot connect to identity provider: {e}"
            raise AuthServiceUnavailableError(msg) from e
