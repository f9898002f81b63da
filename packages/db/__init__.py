"""Database access: connection pool, statements and query execution."""

from packages.db.base import Base, get_database_url, get_engine
from packages.db.executor import QueryError, QueryExecutor, QueryResult, run_statement
from packages.db.pool import ConnectionPool, DatabaseConnectionError, PoolConfig
from packages.db.statements import DEFAULT_STATEMENTS, Statement, StatementSet

__all__ = [
    "Base",
    "ConnectionPool",
    "DEFAULT_STATEMENTS",
    "DatabaseConnectionError",
    "PoolConfig",
    "QueryError",
    "QueryExecutor",
    "QueryResult",
    "Statement",
    "StatementSet",
    "get_database_url",
    "get_engine",
    "run_statement",
]
