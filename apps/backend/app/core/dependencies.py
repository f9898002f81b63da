"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from app.services.order_entry import OrderEntryService


def get_order_entry_service(request: Request) -> OrderEntryService:
    """Return the service built at startup."""
    return request.app.state.order_entry


# Type alias for convenience
OrderEntryServiceDep = Annotated[OrderEntryService, Depends(get_order_entry_service)]
