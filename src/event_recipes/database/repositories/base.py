"""Shared repository plumbing."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from asyncpg import Connection, Pool


def rows_affected(status: str) -> int:
    """Parse the row count from an asyncpg command status such as ``DELETE 3``."""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (AttributeError, ValueError):
        return 0


class BaseRepository:
    """Repository over an injected asyncpg pool.

    Methods accept an optional ``conn`` so several repositories can take
    part in one transaction opened by the caller.
    """

    def __init__(self, pool: Pool) -> None:
        self._pool = pool

    @property
    def pool(self) -> Pool:
        """Get the database connection pool."""
        return self._pool

    @asynccontextmanager
    async def connection(
        self, conn: Connection | None = None
    ) -> AsyncIterator[Connection]:
        """Yield ``conn`` when given, otherwise a connection from the pool."""
        if conn is not None:
            yield conn
            return
        async with self._pool.acquire() as acquired:
            yield acquired

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Connection]:
        """Acquire a connection and run the block in a transaction."""
        async with self._pool.acquire() as conn, conn.transaction():
            yield conn
