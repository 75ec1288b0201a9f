"""Application service: Place Order use case (the Order Service).

Turns the caller's cart into a committed order:

1. Read the cart (it is *not* drained yet) and snapshot name and price
   of every line.
2. Reserve stock for every line through the Inventory Ledger.
3. If any line cannot be reserved, hand back every reservation taken
   and raise ``StockConflict`` naming the lines.
4. Otherwise store the order, settle the reservations and take exactly
   the snapshot out of the cart, all in one storage transaction.  If
   building or storing the order fails, the reservations are handed
   back before the error propagates.
5. Return the order, then notify the customer; a notifier failure is
   logged and never undoes the order.

If the process dies between 2 and 4 the units stay held; the
periodic reconciliation sweep (``ReservationSweeper`` running
``ReconcileReservationsHandler``) returns them.
"""

from __future__ import annotations

import structlog

from shophub.application.dto import OrderDTO
from shophub.application.notifier import Notifier
from shophub.domain.exceptions import ConflictLine, StockConflict, ValidationError
from shophub.domain.model.cart import CartLine
from shophub.domain.model.order import Order, OrderLineItem
from shophub.domain.model.reservation import StockHold
from shophub.domain.model.value_objects import CheckoutId, Customer, Quantity, new_token
from shophub.domain.repository.storage import Storage
from shophub.domain.service.cart_store import CartStore
from shophub.domain.service.inventory_ledger import InventoryLedger

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        storage: Storage,
        ledger: InventoryLedger,
        cart_store: CartStore,
        notifier: Notifier,
    ) -> None:
        self._storage = storage
        self._ledger = ledger
        self._cart_store = cart_store
        self._notifier = notifier

    def handle(self, customer: Customer) -> OrderDTO:
        log = logger.bind(user_id=customer.user_id)

        snapshot = self._cart_store.get(customer.user_id).lines()
        if not snapshot:
            raise ValidationError("Your cart is empty")

        checkout_id = CheckoutId(new_token())
        log = log.bind(checkout_id=checkout_id)
        line_items, holds = self._reserve(snapshot, checkout_id, log)

        try:
            order = Order.place(customer, line_items)
            with self._storage.atomic():
                order.id = self._storage.orders.next_id()
                self._storage.orders.add(order)
                self._ledger.commit_holds(checkout_id, holds)
                self._cart_store.drain(customer.user_id, snapshot)
        except Exception as exc:
            # nothing was committed
            log.warning("order.commit_failed", error=type(exc).__name__, reason=str(exc))
            self._release_all(holds, log)
            raise

        dto = OrderDTO.of(order)
        log.info("order.placed", order_id=dto.id, total=str(dto.total), lines=len(dto.items))

        self._notify(customer, dto, log)
        return dto

    # --- Steps ----------------------------------------------------------------

    def _reserve(
        self, snapshot: list[CartLine], checkout_id: CheckoutId, log
    ) -> tuple[list[OrderLineItem], list[StockHold]]:
        """Reserve every line, or none of them."""
        line_items: list[OrderLineItem] = []
        holds: list[StockHold] = []
        checked: list[ConflictLine] = []

        try:
            for line in snapshot:
                product = self._storage.products.get_by_code(line.product_code)
                if product is None:
                    checked.append(
                        ConflictLine(
                            product_code=line.product_code,
                            product_name=f"Product #{line.product_code}",
                            requested=line.quantity,
                            available=0,
                        )
                    )
                    continue

                result = self._ledger.try_reserve(product.code, line.quantity, checkout_id)
                checked.append(
                    ConflictLine(
                        product_code=product.code,
                        product_name=product.name,
                        requested=line.quantity,
                        available=max(product.stock, line.quantity) if result.ok else result.available,
                    )
                )
                if result.ok:
                    holds.append(result.hold)
                    line_items.append(
                        OrderLineItem(
                            product_code=product.code,
                            product_name=product.name,
                            quantity=Quantity(line.quantity),
                            unit_price=product.price,  # <-- price snapshot
                        )
                    )
        except Exception:
            # fail closed: whatever was taken goes back
            self._release_all(holds, log)
            raise

        if len(holds) != len(snapshot):
            self._release_all(holds, log)
            conflict = StockConflict(checked)
            log.info(
                "order.stock_conflict",
                unavailable=[line.product_code for line in conflict.unavailable],
            )
            raise conflict

        return line_items, holds

    def _release_all(self, holds: list[StockHold], log) -> None:
        for hold in holds:
            try:
                self._ledger.release_hold(hold)
            except Exception:
                # the reconciliation sweep picks the hold up later
                log.exception("order.release_failed", hold_id=hold.id, product_code=hold.product_code)

    def _notify(self, customer: Customer, dto: OrderDTO, log) -> None:
        try:
            self._notifier.order_placed(customer, dto)
        except Exception:
            log.exception("order.notification_failed", order_id=dto.id)
