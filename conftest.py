"""Shared fixtures: a seeded SQLite order database on disk."""

from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import create_engine, insert, text

from packages.db.base import Base
from packages.db.models import Customer, Product

CUSTOMERS = [
    {"id": 7, "company": "Company G"},
    {"id": 8, "company": "Company H"},
]

PRODUCTS = [
    {"id": 3, "product_name": "Northwind Traders Syrup", "list_price": Decimal("10.00")},
    {"id": 5, "product_name": "Northwind Traders Olive Oil", "list_price": Decimal("21.35")},
    {"id": 9, "product_name": "Northwind Traders Mozzarella", "list_price": Decimal("34.80")},
]


@pytest.fixture
def database_path(tmp_path: Path) -> Path:
    """Create the schema and seed customers and products."""
    path = tmp_path / "northwind.db"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(insert(Customer), CUSTOMERS)
        conn.execute(insert(Product), PRODUCTS)
    engine.dispose()
    return path


@pytest.fixture
def database_url(database_path: Path) -> str:
    return f"sqlite+aiosqlite:///{database_path}"


@pytest.fixture
def fetch_rows(database_path: Path):
    """Return a helper that runs a read query with a plain sync connection."""

    def _fetch(sql: str) -> list[tuple]:
        engine = create_engine(f"sqlite:///{database_path}")
        try:
            with engine.connect() as conn:
                return [tuple(row) for row in conn.execute(text(sql))]
        finally:
            engine.dispose()

    return _fetch
