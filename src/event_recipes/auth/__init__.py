"""Authentication: bearer-token validation delegated to pluggable providers.

The rest of the service only needs the caller's opaque user id, exposed
through the ``get_current_user`` dependency.
"""

from event_recipes.auth.dependencies import CurrentUser, get_current_user


__all__ = [
    "CurrentUser",
    "get_current_user",
]
