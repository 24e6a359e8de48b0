"""Application lifecycle events."""

from event_recipes.core.events.lifespan import lifespan


__all__ = ["lifespan"]
