"""Query execution layer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from packages.db.pool import ConnectionPool
from packages.db.statements import Statement

logger = logging.getLogger(__name__)


class QueryError(Exception):
    """
    Raised when a statement fails to execute.

    ``message`` is safe to show to end users. The driver error is kept as
    ``__cause__`` and only ever logged.
    """

    def __init__(self, statement: str, message: str):
        super().__init__(message)
        self.statement = statement
        self.message = message


@dataclass
class QueryResult:
    """Result of a single statement."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    row_count: int = 0
    last_insert_id: int | None = None

    @classmethod
    def from_cursor(cls, result: CursorResult) -> QueryResult:
        if result.returns_rows:
            rows = [dict(row) for row in result.mappings().all()]
            return cls(rows=rows, row_count=len(rows))
        return cls(row_count=result.rowcount, last_insert_id=result.lastrowid)


async def run_statement(
    connection: AsyncConnection,
    statement: Statement,
    *args: Any,
) -> QueryResult:
    """
    Execute a statement on a caller-owned connection.

    Transaction state is left to the caller.

    Raises:
        QueryError: If execution fails.
    """
    params = statement.bind(args)
    try:
        result = await connection.execute(statement.clause, params)
    except SQLAlchemyError as e:
        logger.exception("Error executing sql query '%s'", statement.name)
        raise QueryError(statement.name, statement.failure_message) from e
    return QueryResult.from_cursor(result)


class QueryExecutor:
    """Runs one statement per pooled connection and commits it."""

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    async def execute(self, statement: Statement, *args: Any) -> QueryResult:
        """
        Acquire a connection, run ``statement`` with ``args``, commit, release.

        Raises:
            DatabaseConnectionError: If no connection can be acquired.
            QueryError: If the statement or its commit fails.
        """
        async with self.pool.acquire() as connection:
            result = await run_statement(connection, statement, *args)
            try:
                await connection.commit()
            except SQLAlchemyError as e:
                logger.exception("Error committing sql query '%s'", statement.name)
                raise QueryError(statement.name, statement.failure_message) from e
            return result
