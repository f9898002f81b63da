"""SQLAlchemy base and engine configuration."""

from __future__ import annotations

import os

from sqlalchemy import create_engine
from sqlalchemy.engine import URL
from sqlalchemy.orm import DeclarativeBase


def get_database_url() -> str | URL:
    """
    Return a sync database URL for scripts.

    ``DATABASE_URL_SYNC`` wins when set; otherwise the URL is built from the
    same ``MYSQL_*`` variables the web service reads.
    """

    url = os.getenv("DATABASE_URL_SYNC")
    if url:
        return url
    return URL.create(
        "mysql+pymysql",
        username=os.getenv("MYSQL_USERNAME", "root"),
        password=os.getenv("MYSQL_PASSWORD") or None,
        host=os.getenv("MYSQL_SERVER", "127.0.0.1"),
        port=int(os.getenv("MYSQL_SERVER_PORT", "3306")),
        database=os.getenv("MYSQL_SCHEMA", "northwind"),
    )


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


def get_engine(url: str | URL | None = None):
    """Create a sync SQLAlchemy engine for scripts and seeding."""

    return create_engine(url or get_database_url())
