"""
Order submission workflow.

All steps share one pooled connection and one transaction:
1. Begin
2. Check the customer exists
3. Insert the order row and capture its id
4. Insert each order line, in submission order
5. Commit, or roll back on the first failure
"""

import logging
from collections.abc import Callable
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from packages.db.executor import QueryError, run_statement
from packages.db.pool import ConnectionPool
from packages.db.statements import DEFAULT_STATEMENTS, StatementSet

from .errors import InvalidCustomerError, OrderSubmissionError, TransactionAbortedError
from .models import OrderRequest

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Failed to save the order."


class OrderTransaction:
    """Persists one OrderRequest atomically."""

    def __init__(
        self,
        pool: ConnectionPool,
        statements: StatementSet = DEFAULT_STATEMENTS,
        today: Callable[[], date] = date.today,
    ):
        self.pool = pool
        self.statements = statements
        self.today = today

    async def submit(self, request: OrderRequest) -> int:
        """
        Insert the order and its lines, all or nothing.

        Args:
            request: Customer id and ordered lines to persist.

        Returns:
            The store-generated order id.

        Raises:
            InvalidCustomerError: If the customer does not exist.
            TransactionAbortedError: If any insert, or the commit, fails.
            DatabaseConnectionError: If no connection can be acquired.
        """
        async with self.pool.acquire() as connection:
            step = "begin"
            try:
                await connection.begin()

                step = "validate customer"
                await self._check_customer(connection, request.customer_id)

                step = "insert order"
                result = await run_statement(
                    connection,
                    self.statements.order_insert,
                    request.customer_id,
                    self.today(),
                )
                order_id = result.last_insert_id

                for number, line in enumerate(request.lines, start=1):
                    step = f"insert order line {number}"
                    await run_statement(
                        connection,
                        self.statements.order_detail_insert,
                        order_id,
                        line.product_id,
                        line.quantity,
                    )

                step = "commit"
                await connection.commit()
            except OrderSubmissionError as e:
                await self._rollback(connection, request, step, e)
                raise
            except QueryError as e:
                await self._rollback(connection, request, step, e)
                raise TransactionAbortedError(step, e.message) from e
            except SQLAlchemyError as e:
                await self._rollback(connection, request, step, e)
                raise TransactionAbortedError(step, SAVE_FAILED_MESSAGE) from e

        logger.info(
            "Order %s created for customer %s with %d line(s)",
            order_id,
            request.customer_id,
            len(request.lines),
        )
        return order_id

    async def _check_customer(self, connection: AsyncConnection, customer_id: int) -> None:
        result = await run_statement(connection, self.statements.customer_lookup, customer_id)
        if result.row_count == 0:
            raise InvalidCustomerError(customer_id)

    async def _rollback(
        self,
        connection: AsyncConnection,
        request: OrderRequest,
        step: str,
        error: Exception,
    ) -> None:
        # A failed rollback must not replace the original error.
        logger.error(
            "Failed to insert new order for customer %s at step '%s': %s. "
            "Rolling back transaction.",
            request.customer_id,
            step,
            error,
        )
        try:
            await connection.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback failed for customer %s", request.customer_id)
