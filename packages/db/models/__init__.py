"""ORM model exports."""

from packages.db.models.customers import Customer
from packages.db.models.orders import Order, OrderDetail
from packages.db.models.products import Product

__all__ = [
    "Customer",
    "Order",
    "OrderDetail",
    "Product",
]
