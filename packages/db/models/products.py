"""Product model for the catalog."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from packages.db.base import Base


class Product(Base):
    """A sellable product with its list price."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_name: Mapped[str] = mapped_column(String(50), nullable=False)
    list_price: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False, default=0)
