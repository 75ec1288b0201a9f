"""Cart aggregate: one per user, product code -> quantity."""

from __future__ import annotations

from dataclasses import dataclass, field

from shophub.domain.model.value_objects import ProductCode, Quantity, UserId


@dataclass(frozen=True)
class CartLine:
    product_code: ProductCode
    quantity: int


@dataclass
class Cart:
    """A user's cart.

    Every stored quantity is positive; an entry that would drop to zero
    is removed instead.
    """

    user_id: UserId
    entries: dict[ProductCode, int] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def lines(self) -> list[CartLine]:
        return [CartLine(code, qty) for code, qty in self.entries.items()]

    def quantity_of(self, code: ProductCode) -> int:
        return self.entries.get(code, 0)

    def add(self, code: ProductCode, quantity: int) -> None:
        qty = Quantity(quantity).value
        self.entries[code] = self.entries.get(code, 0) + qty

    def set_quantity(self, code: ProductCode, quantity: int) -> None:
        if quantity <= 0:
            self.remove(code)
            return
        self.entries[code] = Quantity(quantity).value

    def remove(self, code: ProductCode) -> None:
        self.entries.pop(code, None)

    def clear(self) -> list[CartLine]:
        drained = self.lines()
        self.entries = {}
        return drained

    def contains(self, lines: list[CartLine]) -> bool:
        """True if every line's quantity is still present in the cart."""
        return all(self.quantity_of(line.product_code) >= line.quantity for line in lines)

    def subtract(self, lines: list[CartLine]) -> None:
        """Remove exactly ``lines`` and keep anything beyond them.

        Callers check ``contains()`` first.
        """
        for line in lines:
            remaining = self.quantity_of(line.product_code) - line.quantity
            self.set_quantity(line.product_code, remaining)
