"""
Order Entry Service.

Holds the connection pool and statement templates for the life of the
process and exposes the two operations the web layer needs:
listing products and submitting an order.
"""

import logging

from packages.core.catalog import CatalogReader, Product
from packages.core.orders import OrderRequest, OrderTransaction
from packages.db.executor import QueryExecutor
from packages.db.pool import ConnectionPool, PoolConfig
from packages.db.statements import DEFAULT_STATEMENTS, StatementSet

from app.core.config import Settings

logger = logging.getLogger(__name__)


class OrderEntryService:
    """
    Service wiring the catalog reader and the order transaction to one pool.

    Built once at startup and handed to request handlers by reference.
    """

    def __init__(self, pool: ConnectionPool, statements: StatementSet = DEFAULT_STATEMENTS):
        self.pool = pool
        self.statements = statements
        self.executor = QueryExecutor(pool)
        self.catalog = CatalogReader(self.executor, statements.product_list)
        self.orders = OrderTransaction(pool, statements)

    @classmethod
    def from_settings(cls, settings: Settings) -> "OrderEntryService":
        """Create the service and its pool from application settings."""
        config = PoolConfig(
            url=settings.async_database_url,
            pool_size=settings.mysql_conn_limit,
            pool_timeout=settings.mysql_pool_timeout,
            echo=settings.database_echo,
        )
        return cls(ConnectionPool(config))

    async def start(self) -> None:
        """
        Ping the database.

        Raises:
            DatabaseConnectionError: If the store is unreachable.
        """
        logger.info("Pinging database...")
        await self.pool.ping()
        logger.info("Pinged database successfully.")

    async def close(self) -> None:
        await self.pool.dispose()

    async def list_products(self) -> list[Product]:
        return await self.catalog.list_products()

    async def submit_order(self, request: OrderRequest) -> int:
        return await self.orders.submit(request)
