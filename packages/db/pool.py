"""Bounded pool of async database connections."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from sqlalchemy import text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool

logger = logging.getLogger(__name__)


class DatabaseConnectionError(Exception):
    """Raised when the pool cannot hand out a working connection."""

    pass


@dataclass(frozen=True)
class PoolConfig:
    """Connection settings, fixed for the lifetime of a pool."""

    url: str | URL
    pool_size: int = 4
    pool_timeout: float = 30.0
    echo: bool = False


class ConnectionPool:
    """
    Hands out and reclaims connections from a bounded set.

    At most ``pool_size`` connections are checked out at once; further
    callers wait up to ``pool_timeout`` seconds for one to come back.
    """

    def __init__(self, config: PoolConfig, engine: AsyncEngine | None = None):
        self.config = config
        self._engine = engine or create_async_engine(
            config.url,
            echo=config.echo,
            poolclass=AsyncAdaptedQueuePool,
            pool_size=config.pool_size,
            max_overflow=0,
            pool_timeout=config.pool_timeout,
            pool_pre_ping=True,
        )
        self._outstanding = 0

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def outstanding(self) -> int:
        """Number of connections currently checked out."""
        return self._outstanding

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[AsyncConnection]:
        """
        Check out a connection for the duration of the ``async with`` block.

        The connection is returned to the pool on every exit path. Any
        transaction still open at that point is rolled back by the pool.

        Raises:
            DatabaseConnectionError: If the store is unreachable, rejects
                the credentials, or no connection frees up in time.
        """
        try:
            connection = await self._engine.connect()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Unable to acquire database connection: %s", e)
            raise DatabaseConnectionError("Unable to connect to the database.") from e

        self._outstanding += 1
        try:
            yield connection
        finally:
            self._outstanding -= 1
            await connection.close()

    async def ping(self) -> None:
        """Check that the store answers on a pooled connection."""
        async with self.acquire() as connection:
            try:
                await connection.execute(text("SELECT 1"))
            except SQLAlchemyError as e:
                logger.error("Database ping failed: %s", e)
                raise DatabaseConnectionError("Database did not answer ping.") from e

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self._engine.dispose()
