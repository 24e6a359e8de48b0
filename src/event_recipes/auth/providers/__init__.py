"""Authentication providers package.

Pluggable providers implementing the AuthProvider protocol:
- IntrospectionAuthProvider: asks the identity provider (production)
- LocalJWTAuthProvider: validates JWTs with a shared secret
- HeaderAuthProvider: trusts an X-User-ID header (development only)
- DisabledAuthProvider: one anonymous user (testing only)
"""

from event_recipes.auth.providers.exceptions import (
    AuthenticationError,
    AuthProviderError,
    AuthServiceUnavailableError,
    ConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from event_recipes.auth.providers.models import AuthResult, IntrospectionResponse
from event_recipes.auth.providers.protocol import AuthProvider
from event_recipes.auth.providers.header import HeaderAuthProvider
from event_recipes.auth.providers.local_jwt import LocalJWTAuthProvider
from event_recipes.auth.providers.introspection import IntrospectionAuthProvider
from event_recipes.auth.providers.factory import (
    DisabledAuthProvider,
    create_auth_provider,
    get_auth_provider,
    initialize_auth_provider,
    set_auth_provider,
    shutdown_auth_provider,
)


__all__ = [
    "AuthProvider",
    "AuthProviderError",
    "AuthResult",
    "AuthServiceUnavailableError",
    "AuthenticationError",
    "ConfigurationError",
    "DisabledAuthProvider",
    "HeaderAuthProvider",
    "IntrospectionAuthProvider",
    "IntrospectionResponse",
    "LocalJWTAuthProvider",
    "TokenExpiredError",
    "TokenInvalidError",
    "create_auth_provider",
    "get_auth_provider",
    "initialize_auth_provider",
    "set_auth_provider",
    "shutdown_auth_provider",
]
