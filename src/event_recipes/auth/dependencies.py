"""FastAPI security dependencies.

Route handlers depend on ``get_current_user`` to obtain the caller's opaque
user id. Token validation is delegated to the configured auth provider.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel

from event_recipes.auth.providers import (
    AuthenticationError,
    AuthResult,
    AuthServiceUnavailableError,
    TokenExpiredError,
    get_auth_provider,
)
from event_recipes.core.config import AuthMode, get_settings
from event_recipes.observability.logging import bind_context


# Bearer token extraction only; validation happens in the provider.
# auto_error is off so header and disabled modes work without a token.
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/oauth2/token",
    scheme_name="JWT",
    description="Bearer token issued by the identity provider",
    auto_error=False,
)

# Modes that never look at the bearer token
_TOKENLESS_MODES = frozenset({AuthMode.HEADER, AuthMode.DISABLED})

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


class CurrentUser(BaseModel):
    """The authenticated caller."""

    id: str

    @classmethod
    def from_auth_result(cls, result: AuthResult) -> CurrentUser:
        """Create CurrentUser from an AuthResult."""
        return cls(id=result.user_id)


async def get_auth_result(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> AuthResult:
    """Validate the request's credentials with the configured auth provider.

    Raises:
        HTTPException: 401 if authentication fails, 503 if the identity
            provider is unavailable.
    """
    settings = getattr(request.app.state, "settings", None) or get_settings()

    if settings.auth_mode_enum in _TOKENLESS_MODES:
        token = ""
    elif not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing token",
            headers=_BEARER_CHALLENGE,
        )

    try:
        provider = get_auth_provider()
        return await provider.validate_token(token, request)

    except TokenExpiredError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers=_BEARER_CHALLENGE,
        ) from None

    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e) or "Invalid token",
            headers=_BEARER_CHALLENGE,
        ) from None

    except AuthServiceUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Authentication service unavailable: {e}",
        ) from None


async def get_current_user(
    auth_result: Annotated[AuthResult, Depends(get_auth_result)],
) -> CurrentUser:
    """Get the current authenticated user and tag the log context with it."""
    bind_context(user_id=auth_result.user_id)
    return CurrentUser.from_auth_result(auth_result)
