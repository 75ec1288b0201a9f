"""Product aggregate.

Products live independently of orders.  Two of their fields are owned by
other components: ``stock`` is only ever changed by the Inventory Ledger,
and ``rating`` / ``review_count`` only by the Rating Aggregator.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from shophub.domain.exceptions import ValidationError
from shophub.domain.model.value_objects import Money, ProductCode


@dataclass
class Product:
    """A product in the catalogue.

    Invariants:
    - ``stock`` is never negative
    - ``rating`` is within 0.0 .. 5.0 with one decimal place
    """

    code: ProductCode
    name: str
    price: Money
    stock: int = 0
    rating: Decimal = Decimal("0")
    review_count: int = 0
    category: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")
        if self.stock < 0:
            raise ValidationError(f"Stock cannot be negative, got {self.stock}")

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Existing orders are unaffected; they captured a price snapshot
        when they were placed.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def rename(self, new_name: str) -> None:
        if not new_name or not new_name.strip():
            raise ValidationError("Product name is required")
        self.name = new_name.strip()
