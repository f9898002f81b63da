"""Product catalog."""

from .reader import CatalogReader, Product

__all__ = [
    "CatalogReader",
    "Product",
]
