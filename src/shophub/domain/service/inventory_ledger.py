"""Domain service: Inventory Ledger.

The only component allowed to change a product's stock.  Every change
is an optimistic conditional write: read the current level, then ask the
repository to swap it for the new level *only if it is still the value
that was read*.  A lost race is retried with a fresh read, so concurrent
reservations against one product behave as if they ran one after another
and the stock can never be driven below zero.

Reservations made for a checkout are recorded as ``StockHold`` rows in
the same transaction as the decrement.  The order commit deletes them;
``release_expired_holds`` hands back the units of any checkout that
never got that far.
"""

from __future__ import annotations

from datetime import datetime

import structlog

from shophub.domain.exceptions import (
    CheckoutConflict,
    EntityNotFoundError,
    PersistenceError,
    ValidationError,
)
from shophub.domain.model.reservation import (
    InsufficientStock,
    ReservationResult,
    Reserved,
    StockHold,
)
from shophub.domain.model.value_objects import CheckoutId, ProductCode, Quantity
from shophub.domain.repository.storage import Storage

logger = structlog.get_logger(__name__)

MAX_CAS_ATTEMPTS = 10


class InventoryLedger:

    def __init__(self, storage: Storage, max_attempts: int = MAX_CAS_ATTEMPTS) -> None:
        self._storage = storage
        self._max_attempts = max_attempts

    # --- Reservations ---------------------------------------------------------

    def try_reserve(
        self, code: ProductCode, qty: int, checkout_id: CheckoutId
    ) -> ReservationResult:
        """Take ``qty`` units out of stock if that many are available.

        Returns ``Reserved`` carrying the hold, or ``InsufficientStock``
        with the level that was seen.  Raises ``PersistenceError`` if the
        write keeps losing races; in that case nothing was reserved.
        """
        qty = Quantity(qty).value

        for _ in range(self._max_attempts):
            product = self._storage.products.get_by_code(code)
            if product is None:
                return InsufficientStock(code, requested=qty, available=0, exists=False)
            if product.stock < qty:
                logger.info(
                    "stock.insufficient",
                    product_code=code,
                    requested=qty,
                    available=product.stock,
                )
                return InsufficientStock(code, requested=qty, available=product.stock)

            hold = StockHold.new(checkout_id, code, qty)
            with self._storage.atomic():
                swapped = self._storage.products.compare_and_set_stock(
                    code, product.stock, product.stock - qty
                )
                if swapped:
                    self._storage.holds.add(hold)
            if swapped:
                logger.debug(
                    "stock.reserved",
                    product_code=code,
                    quantity=qty,
                    checkout_id=checkout_id,
                    hold_id=hold.id,
                )
                return Reserved(hold)

        logger.warning("stock.reserve_contention", product_code=code, attempts=self._max_attempts)
        raise PersistenceError(
            f"Could not reserve product #{code}: too much concurrent activity"
        )

    def release(self, code: ProductCode, qty: int) -> None:
        """Put ``qty`` units back into stock."""
        qty = Quantity(qty).value
        self._adjust(code, lambda stock: stock + qty)

    def release_hold(self, hold: StockHold) -> bool:
        """Hand a hold's units back to stock and forget the hold.

        Returns False if the hold was already gone (committed or swept).
        """
        with self._storage.atomic():
            if not self._storage.holds.delete(hold.id):
                return False
            self._adjust(hold.product_code, lambda stock: stock + hold.quantity)
        logger.debug(
            "stock.hold_released",
            product_code=hold.product_code,
            quantity=hold.quantity,
            checkout_id=hold.checkout_id,
        )
        return True

    def commit_holds(self, checkout_id: CheckoutId, holds: list[StockHold]) -> None:
        """Turn a checkout's holds into a permanent deduction.

        Must run inside the transaction that stores the order.  Raises
        ``CheckoutConflict`` if any hold has already been swept.
        """
        with self._storage.atomic():
            present = {h.id for h in self._storage.holds.list_for_checkout(checkout_id)}
            missing = [h for h in holds if h.id not in present]
            if missing:
                raise CheckoutConflict(
                    "Your reservation expired before the order was saved; please try again"
                )
            for hold in holds:
                self._storage.holds.delete(hold.id)

    # --- Administration -------------------------------------------------------

    def set_stock(self, code: ProductCode, level: int) -> None:
        """Set an absolute stock level (restock or stock-take)."""
        # bool is an int subclass; True is not a stock level
        if not isinstance(level, int) or isinstance(level, bool) or level < 0:
            raise ValidationError(f"Stock level must be a non-negative integer, got {level!r}")
        self._adjust(code, lambda _stock: level)

    def release_expired_holds(self, older_than: datetime) -> list[StockHold]:
        """Reconciliation sweep: release holds created before ``older_than``."""
        released: list[StockHold] = []
        for hold in self._storage.holds.list_created_before(older_than):
            if self.release_hold(hold):
                released.append(hold)
        if released:
            logger.warning(
                "stock.expired_holds_released",
                count=len(released),
                checkouts=sorted({h.checkout_id for h in released}),
            )
        return released

    def open_holds(self) -> list[StockHold]:
        return self._storage.holds.list_all()

    # --- Internal helpers -----------------------------------------------------

    def _adjust(self, code: ProductCode, compute) -> None:
        for _ in range(self._max_attempts):
            product = self._storage.products.get_by_code(code)
            if product is None:
                raise EntityNotFoundError(f"Product #{code} not found")
            new_level = compute(product.stock)
            if new_level < 0:
                raise ValidationError(f"Stock for product #{code} cannot go negative")
            if self._storage.products.compare_and_set_stock(code, product.stock, new_level):
                return
        raise PersistenceError(
            f"Could not update stock for product #{code}: too much concurrent activity"
        )
