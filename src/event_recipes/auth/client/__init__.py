"""Clients for the external identity provider."""

from event_recipes.auth.client.auth_service import AuthServiceClient


__all__ = ["AuthServiceClient"]
