"""Order request models."""

from pydantic import BaseModel, ConfigDict


class OrderLine(BaseModel):
    """One (product, quantity) pair of an order.

    Quantity is not range-checked; zero and negative values pass through.
    """

    model_config = ConfigDict(frozen=True)

    product_id: int
    quantity: int


class OrderRequest(BaseModel):
    """An order as submitted, before it is persisted.

    ``lines`` keeps submission order and may be empty.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: int
    lines: tuple[OrderLine, ...] = ()
