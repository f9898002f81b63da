"""
Tests for the order submission transaction.

Runs against a seeded SQLite database:
- customers 7 and 8
- products 3, 5 and 9
"""

import asyncio
from datetime import date
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncConnection

from packages.core.catalog import CatalogReader, Product
from packages.core.orders import (
    InvalidCustomerError,
    OrderLine,
    OrderRequest,
    OrderTransaction,
    TransactionAbortedError,
)
from packages.core.orders import transaction as transaction_module
from packages.db.executor import QueryExecutor
from packages.db.pool import ConnectionPool, DatabaseConnectionError, PoolConfig

ORDER_DATE = date(2024, 3, 15)


# -----------------------------
# Fixtures
# -----------------------------


@pytest.fixture
async def pool(database_url: str):
    pool = ConnectionPool(PoolConfig(url=database_url, pool_size=2))
    yield pool
    await pool.dispose()


@pytest.fixture
def orders(pool: ConnectionPool) -> OrderTransaction:
    return OrderTransaction(pool, today=lambda: ORDER_DATE)


def request_for(customer_id: int, *lines: tuple[int, int]) -> OrderRequest:
    return OrderRequest(
        customer_id=customer_id,
        lines=tuple(OrderLine(product_id=p, quantity=q) for p, q in lines),
    )


# -----------------------------
# Successful Submissions
# -----------------------------


class TestSubmitSuccess:
    """Tests for orders that commit."""

    async def test_order_and_lines_share_generated_id(
        self, orders: OrderTransaction, fetch_rows
    ) -> None:
        """Customer 7 ordering (3, 2) and (5, 1) gives one order with two lines."""
        order_id = await orders.submit(request_for(7, (3, 2), (5, 1)))

        assert fetch_rows("SELECT id, customer_id FROM orders") == [(order_id, 7)]
        assert fetch_rows(
            "SELECT order_id, product_id, quantity FROM order_details ORDER BY product_id"
        ) == [(order_id, 3, 2), (order_id, 5, 1)]

    async def test_order_date_is_today(self, orders: OrderTransaction, fetch_rows) -> None:
        await orders.submit(request_for(7, (9, 1)))
        assert fetch_rows("SELECT order_date FROM orders") == [(ORDER_DATE.isoformat(),)]

    async def test_empty_order_is_accepted(
        self, orders: OrderTransaction, fetch_rows
    ) -> None:
        """An order without lines still creates the order row."""
        order_id = await orders.submit(request_for(7))

        assert fetch_rows("SELECT id, customer_id FROM orders") == [(order_id, 7)]
        assert fetch_rows("SELECT * FROM order_details") == []

    async def test_quantity_is_not_range_checked(
        self, orders: OrderTransaction, fetch_rows
    ) -> None:
        await orders.submit(request_for(8, (3, 0), (5, -4)))
        assert fetch_rows(
            "SELECT product_id, quantity FROM order_details ORDER BY product_id"
        ) == [(3, 0), (5, -4)]

    async def test_consecutive_orders_get_distinct_ids(self, orders: OrderTransaction) -> None:
        first = await orders.submit(request_for(7, (3, 1)))
        second = await orders.submit(request_for(7, (3, 1)))
        assert first != second


# -----------------------------
# Failed Submissions
# -----------------------------


class TestSubmitFailure:
    """Tests for orders that roll back."""

    async def test_unknown_customer_persists_nothing(
        self, orders: OrderTransaction, fetch_rows
    ) -> None:
        with pytest.raises(InvalidCustomerError) as exc_info:
            await orders.submit(request_for(999, (3, 2)))

        assert exc_info.value.message == "Invalid customer id!"
        assert exc_info.value.customer_id == 999
        assert fetch_rows("SELECT * FROM orders") == []
        assert fetch_rows("SELECT * FROM order_details") == []

    async def test_unknown_customer_attempts_no_insert(self, orders: OrderTransaction) -> None:
        calls = []
        real_run = transaction_module.run_statement

        async def spy(connection, statement, *args):
            calls.append(statement.name)
            return await real_run(connection, statement, *args)

        with patch.object(transaction_module, "run_statement", spy):
            with pytest.raises(InvalidCustomerError):
                await orders.submit(request_for(999, (3, 2)))

        assert calls == ["get_customer_id"]

    async def test_failed_line_rolls_back_whole_order(
        self, orders: OrderTransaction, fetch_rows
    ) -> None:
        """Repeating a product violates the order_details key on line 2."""
        with pytest.raises(TransactionAbortedError) as exc_info:
            await orders.submit(request_for(7, (3, 2), (3, 1)))

        assert exc_info.value.step == "insert order line 2"
        assert exc_info.value.message == "Failed to insert order details."
        assert fetch_rows("SELECT * FROM orders") == []
        assert fetch_rows("SELECT * FROM order_details") == []

    async def test_remaining_lines_not_attempted(self, orders: OrderTransaction) -> None:
        calls = []
        real_run = transaction_module.run_statement

        async def spy(connection, statement, *args):
            calls.append(statement.name)
            return await real_run(connection, statement, *args)

        with patch.object(transaction_module, "run_statement", spy):
            with pytest.raises(TransactionAbortedError):
                await orders.submit(request_for(7, (3, 2), (3, 1), (5, 1)))

        assert calls == [
            "get_customer_id",
            "insert_order",
            "insert_order_detail",
            "insert_order_detail",
        ]

    async def test_rollback_failure_keeps_original_error(
        self, orders: OrderTransaction
    ) -> None:
        rollback = AsyncMock(side_effect=OperationalError("ROLLBACK", {}, Exception("gone")))
        with patch.object(AsyncConnection, "rollback", rollback):
            with pytest.raises(TransactionAbortedError) as exc_info:
                await orders.submit(request_for(7, (3, 2), (3, 1)))

        rollback.assert_awaited_once()
        assert exc_info.value.message == "Failed to insert order details."
        assert orders.pool.outstanding == 0

    async def test_unreachable_store_raises_connection_error(self, tmp_path) -> None:
        url = f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'nowhere.db'}"
        pool = ConnectionPool(PoolConfig(url=url))
        try:
            with pytest.raises(DatabaseConnectionError):
                await OrderTransaction(pool).submit(request_for(7, (3, 1)))
        finally:
            await pool.dispose()


# -----------------------------
# Pool Balance
# -----------------------------


async def test_connections_balanced_after_mixed_submissions(
    orders: OrderTransaction,
) -> None:
    """Every submit returns its connection, whatever the outcome."""
    await orders.submit(request_for(7, (3, 1)))
    with pytest.raises(InvalidCustomerError):
        await orders.submit(request_for(999))
    with pytest.raises(TransactionAbortedError):
        await orders.submit(request_for(8, (5, 1), (5, 1)))
    await orders.submit(request_for(8))

    assert orders.pool.outstanding == 0


async def test_concurrent_submissions_share_one_connection(
    database_url: str, fetch_rows
) -> None:
    """Five submits and a catalog read in flight together on a pool of one."""
    pool = ConnectionPool(PoolConfig(url=database_url, pool_size=1, pool_timeout=10))
    orders = OrderTransaction(pool, today=lambda: ORDER_DATE)
    catalog = CatalogReader(QueryExecutor(pool))

    try:
        results = await asyncio.gather(
            *(orders.submit(request_for(7, (3, n))) for n in range(1, 6)),
            catalog.list_products(),
        )
    finally:
        await pool.dispose()

    *order_ids, products = results
    assert len(set(order_ids)) == 5
    assert all(isinstance(p, Product) for p in products)
    assert [p.id for p in products] == [3, 5, 9]
    assert sorted(fetch_rows("SELECT id FROM orders")) == sorted((i,) for i in order_ids)
    quantities = fetch_rows("SELECT quantity FROM order_details ORDER BY quantity")
    assert quantities == [(1,), (2,), (3,), (4,), (5,)]
    assert pool.outstanding == 0
