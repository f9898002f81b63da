"""Read-only access to the product catalog."""

from dataclasses import dataclass
from decimal import Decimal

from packages.db.executor import QueryExecutor
from packages.db.statements import GET_PRODUCT_LIST, Statement


@dataclass(frozen=True)
class Product:
    """A product as shown on the order form."""

    id: int
    name: str
    list_price: Decimal


class CatalogReader:
    """Lists products. Every call re-queries the store."""

    def __init__(self, executor: QueryExecutor, statement: Statement = GET_PRODUCT_LIST):
        self.executor = executor
        self.statement = statement

    async def list_products(self) -> list[Product]:
        """
        Return all products in store order.

        Raises:
            QueryError: If the product query fails.
        """
        result = await self.executor.execute(self.statement)
        return [
            Product(
                id=int(row["id"]),
                name=row["product_name"],
                list_price=Decimal(str(row["list_price"])),
            )
            for row in result.rows
        ]
