"""SQL statement templates used by the order desk."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from sqlalchemy import TextClause, text


@dataclass(frozen=True)
class Statement:
    """
    A parameterized SQL statement.

    Arguments are bound positionally: the n-th argument passed at execution
    time fills the n-th name in ``params``. Values are always sent as bind
    parameters, never spliced into the SQL string.
    """

    name: str
    sql: str
    params: tuple[str, ...] = ()
    failure_message: str = "Error executing query."
    clause: TextClause = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "clause", text(self.sql))

    def bind(self, args: Sequence[Any]) -> dict[str, Any]:
        """Map positional arguments onto the statement's parameter names."""
        if len(args) != len(self.params):
            raise ValueError(
                f"Statement '{self.name}' takes {len(self.params)} "
                f"argument(s), got {len(args)}"
            )
        return dict(zip(self.params, args))


GET_PRODUCT_LIST = Statement(
    name="get_product_list",
    sql="SELECT id, product_name, list_price FROM products ORDER BY id",
    failure_message="Unable to load the product list.",
)

GET_CUSTOMER_ID = Statement(
    name="get_customer_id",
    sql="SELECT id FROM customers WHERE id = :customer_id",
    params=("customer_id",),
    failure_message="Unable to verify the customer.",
)

INSERT_ORDER = Statement(
    name="insert_order",
    sql="INSERT INTO orders (customer_id, order_date) VALUES (:customer_id, :order_date)",
    params=("customer_id", "order_date"),
    failure_message="Failed to insert new order.",
)

INSERT_ORDER_DETAIL = Statement(
    name="insert_order_detail",
    sql=(
        "INSERT INTO order_details (order_id, product_id, quantity) "
        "VALUES (:order_id, :product_id, :quantity)"
    ),
    params=("order_id", "product_id", "quantity"),
    failure_message="Failed to insert order details.",
)


@dataclass(frozen=True)
class StatementSet:
    """The statements an order desk runs, grouped for injection."""

    product_list: Statement = GET_PRODUCT_LIST
    customer_lookup: Statement = GET_CUSTOMER_ID
    order_insert: Statement = INSERT_ORDER
    order_detail_insert: Statement = INSERT_ORDER_DETAIL


DEFAULT_STATEMENTS = StatementSet()
