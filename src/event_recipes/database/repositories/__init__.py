"""Database repositories."""

from event_recipes.database.repositories.events import EventRepository
from event_recipes.database.repositories.recipes import RecipeRepository


__all__ = ["EventRepository", "RecipeRepository"]
