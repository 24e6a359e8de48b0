"""Header-based authentication provider.

Reads the user id from a request header. Use this only for local
development, tests, or behind a gateway that has already authenticated the
caller: header values are trusted completely.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from event_recipes.auth.providers.exceptions import AuthenticationError
from event_recipes.auth.providers.models import AuthResult
from event_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger(__name__)


class HeaderAuthProvider:
    """Extracts the user id (and optional roles) from request headers."""

    def __init__(
        self,
        user_id_header: str = "X-User-ID",
        roles_header: str = "X-User-Roles",
        default_roles: list[str] | None = None,
    ) -> None:
        self.user_id_header = user_id_header
        self.roles_header = roles_header
        self.default_roles = default_roles or ["user"]

    @property
    def provider_name(self) -> str:
        """Return provider name for logging."""
        return "header"

    async def validate_token(
        self,
        _token: str,
        request: Request | None = None,
    ) -> AuthResult:
        """Build an AuthResult from request headers; the token is ignored.

        Raises:
            AuthenticationError: If request is None or the user id header is missing.
        """
        if request is None:
            msg = "HeaderAuthProvider requires request object for header access"
            raise AuthenticationError(msg)

        user_id = request.headers.get(self.user_id_header)
        if not user_id:
            msg = f"Missing required header: {self.user_id_header}"
            raise AuthenticationError(msg)

        roles_str = request.headers.get(self.roles_header, "")
        roles = [r.strip() for r in roles_str.split(",") if r.strip()]
        if not roles:
            roles = self.default_roles.copy()

        logger.debug("Authenticated via headers", user_id=user_id)

        return AuthResult(
            user_id=user_id,
            roles=roles,
            token_type="header",  # noqa: S106 - not a password
            raw_claims={"source": "headers"},
        )

    async def initialize(self) -> None:
        """Initialize the provider."""
        logger.warning(
            "HeaderAuthProvider is enabled - ensure this is only used in "
            "development/testing or behind a trusted gateway",
            user_id_header=self.user_id_header,
        )

    async def shutdown(self) -> None:
        """Nothing to release."""
