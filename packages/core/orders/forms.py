"""
Order form parsing.

Turns the form-encoded body of an order submission into an OrderRequest:

    custId=7&product=3&product=5&qty3=2&qty5=1

gives customer 7 with lines (3, 2) and (5, 1). Each selected ``product``
value names the field ``qty<product>`` holding its quantity.
"""

from typing import Protocol

from .errors import OrderFormError
from .models import OrderLine, OrderRequest

CUSTOMER_FIELD = "custId"
PRODUCT_FIELD = "product"
QUANTITY_PREFIX = "qty"


class MultiValueForm(Protocol):
    """Form data that may carry several values per key."""

    def get(self, key: str, default=None): ...

    def getlist(self, key: str) -> list: ...


def _parse_int(raw, message: str) -> int:
    if not isinstance(raw, str):
        raise OrderFormError(message)
    try:
        return int(raw.strip())
    except ValueError:
        raise OrderFormError(message)


def parse_order_form(form: MultiValueForm) -> OrderRequest:
    """
    Build an OrderRequest from submitted form fields.

    Raises:
        OrderFormError: If the customer id, a product id or a quantity is
            missing or not an integer.
    """
    customer_id = _parse_int(form.get(CUSTOMER_FIELD), "Invalid customer id!")

    lines = []
    for raw_product in form.getlist(PRODUCT_FIELD):
        product_id = _parse_int(raw_product, f"Invalid product id: {raw_product!r}")
        raw_quantity = form.get(f"{QUANTITY_PREFIX}{raw_product}")
        if raw_quantity is None or raw_quantity == "":
            raise OrderFormError(f"Missing quantity for product {product_id}")
        quantity = _parse_int(raw_quantity, f"Invalid quantity for product {product_id}")
        lines.append(OrderLine(product_id=product_id, quantity=quantity))

    return OrderRequest(customer_id=customer_id, lines=tuple(lines))
