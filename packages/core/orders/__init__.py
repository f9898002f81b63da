"""Order entry: request models, form parsing and the submission transaction."""

from .errors import (
    InvalidCustomerError,
    OrderFormError,
    OrderSubmissionError,
    TransactionAbortedError,
)
from .forms import parse_order_form
from .models import OrderLine, OrderRequest
from .transaction import OrderTransaction

__all__ = [
    "InvalidCustomerError",
    "OrderFormError",
    "OrderLine",
    "OrderRequest",
    "OrderSubmissionError",
    "OrderTransaction",
    "TransactionAbortedError",
    "parse_order_form",
]
