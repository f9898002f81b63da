"""Customer model. Only existence is checked by the order workflow."""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from packages.db.base import Base


class Customer(Base):
    """Represents a buyer allowed to place orders."""

    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company: Mapped[str | None] = mapped_column(String(50), nullable=True)

    orders = relationship("Order", back_populates="customer")
