"""Authentication provider factory.

Creates the provider selected by ``auth.mode`` and holds the instance used
by request dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from event_recipes.auth.providers.exceptions import ConfigurationError
from event_recipes.auth.providers.header import HeaderAuthProvider
from event_recipes.auth.providers.introspection import IntrospectionAuthProvider
from event_recipes.auth.providers.local_jwt import LocalJWTAuthProvider
from event_recipes.auth.providers.models import AuthResult
from event_recipes.core.config import AuthMode, get_settings
from event_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    from event_recipes.auth.providers.protocol import AuthProvider
    from event_recipes.core.config import Settings

logger = get_logger(__name__)

# Fixed development secret - safe for local dev, blocked in production
_DEV_JWT_SECRET = "insecure-dev-key-do-not-use-in-production"  # noqa: S105


def _get_jwt_secret(settings: Settings) -> str:
    """Get JWT secret, refusing to fall back to the dev secret in production.

    Raises:
        ConfigurationError: If secret is not set in production.
    """
    if settings.JWT_SECRET_KEY:
        return settings.JWT_SECRET_KEY

    if settings.is_production:
        msg = "JWT_SECRET_KEY must be set in production for local_jwt auth mode"
        raise ConfigurationError(msg)

    logger.warning("Using insecure development JWT secret - do not use in production")
    return _DEV_JWT_SECRET


# Provider state container (avoids global statement for mutation)
_state: dict[str, AuthProvider | None] = {"provider": None}


class DisabledAuthProvider:
    """Auth provider that treats every caller as the same anonymous user.

    All events then belong to one shared owner. Never use in production.
    """

    def __init__(self, user_id: str = "anonymous") -> None:
        self.user_id = user_id

    @property
    def provider_name(self) -> str:
        return "disabled"

    async def validate_token(
        self,
        _token: str,
        _request: object = None,
    ) -> AuthResult:
        """Return the fixed anonymous user."""
        return AuthResult(
            user_id=self.user_id,
            roles=["anonymous"],
            token_type="none",  # noqa: S106 - not a password
            raw_claims={"auth_disabled": True},
        )

    async def initialize(self) -> None:
        logger.warning(
            "DisabledAuthProvider initialized - authentication is disabled! "
            "Ensure this is intentional and not a production deployment."
        )

    async def shutdown(self) -> None:
        pass


def _create_local_jwt_provider(settings: Settings) -> LocalJWTAuthProvider:
    return LocalJWTAuthProvider(
        secret_key=_get_jwt_secret(settings),
        algorithm=settings.auth.jwt.algorithm,
        issuer=settings.auth.jwt_validation.issuer,
        audience=settings.auth.jwt_validation.audience or None,
    )


def create_auth_provider(settings: Settings | None = None) -> AuthProvider:
    """Create an authentication provider based on configuration.

    Args:
        settings: Application settings. If None, loaded from environment.

    Raises:
        ConfigurationError: If required settings are missing for the auth mode.
    """
    if settings is None:
        settings = get_settings()

    mode = settings.auth_mode_enum
    logger.info("Creating auth provider", mode=mode.value)

    if mode == AuthMode.DISABLED:
        if settings.is_production:
            msg = "Authentication cannot be disabled in production"
            raise ConfigurationError(msg)
        return DisabledAuthProvider()

    if mode == AuthMode.HEADER:
        return HeaderAuthProvider(
            user_id_header=settings.auth.headers.user_id,
            roles_header=settings.auth.headers.roles,
        )

    if mode == AuthMode.LOCAL_JWT:
        return _create_local_jwt_provider(settings)

    if mode == AuthMode.INTROSPECTION:
        if not settings.auth.service.url:
            msg = "auth.service.url is required for introspection mode"
            raise ConfigurationError(msg)
        if not settings.auth.service.client_id:
            msg = "auth.service.client_id is required for introspection mode"
            raise ConfigurationError(msg)
        if not settings.AUTH_SERVICE_CLIENT_SECRET:
            msg = "AUTH_SERVICE_CLIENT_SECRET is required for introspection mode"
            raise ConfigurationError(msg)

        fallback: AuthProvider | None = None
        if settings.auth.introspection.fallback_local:
            logger.info("Configuring local JWT fallback for introspection")
            fallback = _create_local_jwt_provider(settings)

        return IntrospectionAuthProvider(
            base_url=settings.auth.service.url,
            client_id=settings.auth.service.client_id,
            client_secret=settings.AUTH_SERVICE_CLIENT_SECRET,
            timeout=settings.auth.introspection.timeout,
            fallback_provider=fallback,
        )

    msg = f"Unknown auth mode: {mode}"
    raise ConfigurationError(msg)


def get_auth_provider() -> AuthProvider:
    """Get the current auth provider instance.

    Raises:
        RuntimeError: If the provider has not been initialized.
    """
    provider = _state["provider"]
    if provider is None:
        msg = "Auth provider not initialized. Call set_auth_provider() during startup."
        raise RuntimeError(msg)
    return provider


def set_auth_provider(provider: AuthProvider | None) -> None:
    """Set (or clear, with None) the global auth provider instance."""
    _state["provider"] = provider
    if provider is not None:
        logger.info("Auth provider set", provider=provider.provider_name)


async def initialize_auth_provider(settings: Settings | None = None) -> AuthProvider:
    """Create, initialize, and register the auth provider."""
    provider = create_auth_provider(settings)
    await provider.initialize()
    set_auth_provider(provider)
    return provider


async def shutdown_auth_provider() -> None:
    """Shutdown the global auth provider and clear it."""
    provider = _state["provider"]
    if provider is not None:
        await provider.shutdown()
        _state["provider"] = None
        logger.info("Auth provider shutdown complete")
