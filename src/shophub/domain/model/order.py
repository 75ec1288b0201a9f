"""Order aggregate: the committed result of a checkout.

An order owns an immutable snapshot of what was bought and at what price.
Only its status moves, and only forward.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from shophub.domain.exceptions import ValidationError
from shophub.domain.model.value_objects import (
    Customer,
    Money,
    OrderId,
    ProductCode,
    Quantity,
    UserId,
)


class OrderStatus(Enum):
    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"


_NEXT_STATUS = {
    OrderStatus.PENDING: OrderStatus.SHIPPED,
    OrderStatus.SHIPPED: OrderStatus.DELIVERED,
}


@dataclass(frozen=True)
class OrderLineItem:
    """Captures name and price of a product at the moment of purchase."""

    product_code: ProductCode
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at checkout

    @property
    def line_total(self) -> Money:
        """Unrounded; the order total is rounded once."""
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.place()`` for new orders.  The ``__init__`` stays simple
    so the repository can reconstitute persisted orders without
    re-validating.
    """

    id: OrderId | None
    user_id: UserId
    user_name: str
    items: tuple[OrderLineItem, ...]
    status: OrderStatus = OrderStatus.PENDING
    placed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(customer: Customer, items: list[OrderLineItem]) -> Order:
        if not items:
            raise ValidationError("Order must contain at least one item")

        currencies = {item.unit_price.currency for item in items}
        if len(currencies) > 1:
            raise ValidationError(f"Order mixes currencies: {sorted(currencies)}")

        return Order(
            id=None,
            user_id=customer.user_id,
            user_name=customer.display_name,
            items=tuple(items),
        )

    # --- State transitions ----------------------------------------------------

    def advance_to(self, new_status: OrderStatus) -> None:
        """Move one step along Pending -> Shipped -> Delivered."""
        expected = _NEXT_STATUS.get(self.status)
        if expected is None:
            raise ValidationError(
                f"Order #{self.id} is already {self.status.value}"
            )
        if new_status != expected:
            raise ValidationError(
                f"Cannot move order #{self.id} from {self.status.value} "
                f"to {new_status.value}; next status is {expected.value}"
            )
        self.status = new_status

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero(self.items[0].unit_price.currency)
        for item in self.items:
            result = result + item.line_total
        return result.rounded()

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)
