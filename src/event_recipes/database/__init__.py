"""Database access: connection pool, schema bootstrap and repositories."""

from event_recipes.database.connection import (
    check_database_health,
    close_database_pool,
    create_database_pool,
)
from event_recipes.database.schema import ensure_schema


__all__ = [
    "check_database_health",
    "close_database_pool",
    "create_database_pool",
    "ensure_schema",
]
