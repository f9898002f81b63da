"""Order entry service."""

from .service import OrderEntryService

__all__ = ["OrderEntryService"]
