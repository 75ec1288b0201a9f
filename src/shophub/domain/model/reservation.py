"""Stock reservations made during checkout.

A ``StockHold`` records units taken out of a product's stock on behalf of
a checkout that has not committed yet.  The commit deletes the checkout's
holds in the same transaction that stores the order, so a hold that
outlives its time-to-live belongs to a checkout that never finished and
its units can be handed back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from shophub.domain.model.value_objects import CheckoutId, HoldId, ProductCode, new_token


@dataclass(frozen=True)
class StockHold:
    id: HoldId
    checkout_id: CheckoutId
    product_code: ProductCode
    quantity: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def new(checkout_id: CheckoutId, product_code: ProductCode, quantity: int) -> StockHold:
        return StockHold(
            id=HoldId(new_token()),
            checkout_id=checkout_id,
            product_code=product_code,
            quantity=quantity,
        )


@dataclass(frozen=True)
class Reserved:
    """``try_reserve`` succeeded; stock was decremented under ``hold``."""

    hold: StockHold

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class InsufficientStock:
    """``try_reserve`` failed; nothing was changed."""

    product_code: ProductCode
    requested: int
    available: int
    exists: bool = True

    @property
    def ok(self) -> bool:
        return False


ReservationResult = Reserved | InsufficientStock
