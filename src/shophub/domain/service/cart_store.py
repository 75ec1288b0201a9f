"""Domain service: Cart Store.

Every cart mutation is a read-modify-write of one user's cart inside a
single storage transaction, so concurrent requests from the same user
(two tabs, two devices) never lose each other's updates.
"""

from __future__ import annotations

import structlog

from shophub.domain.exceptions import CheckoutConflict
from shophub.domain.model.cart import Cart, CartLine
from shophub.domain.model.value_objects import ProductCode, UserId
from shophub.domain.repository.storage import Storage

logger = structlog.get_logger(__name__)


class CartStore:

    def __init__(self, storage: Storage) -> None:
        self._storage = storage

    def get(self, user_id: UserId) -> Cart:
        return self._storage.carts.get(user_id) or Cart(user_id=user_id)

    def add(self, user_id: UserId, code: ProductCode, qty: int) -> Cart:
        """Add to an existing entry or create one.  Stock is checked at checkout."""
        with self._storage.atomic():
            cart = self.get(user_id)
            cart.add(code, qty)
            self._storage.carts.save(cart)
        return cart

    def set_quantity(self, user_id: UserId, code: ProductCode, qty: int) -> Cart:
        with self._storage.atomic():
            cart = self.get(user_id)
            cart.set_quantity(code, qty)
            self._storage.carts.save(cart)
        return cart

    def remove(self, user_id: UserId, code: ProductCode) -> Cart:
        with self._storage.atomic():
            cart = self.get(user_id)
            if code in cart.entries:
                cart.remove(code)
                self._storage.carts.save(cart)
        return cart

    def drain(self, user_id: UserId, lines: list[CartLine] | None = None) -> list[CartLine]:
        """Atomically take lines out of the cart and return what was taken.

        Without ``lines`` the whole cart is emptied.  With a snapshot,
        exactly those quantities are removed; anything added after the
        snapshot stays.  Raises ``CheckoutConflict`` if the cart no longer
        holds the snapshot.
        """
        with self._storage.atomic():
            cart = self.get(user_id)
            if lines is None:
                drained = cart.clear()
            else:
                if not cart.contains(lines):
                    logger.info("cart.drain_conflict", user_id=user_id)
                    raise CheckoutConflict(
                        "Your cart changed while the order was being placed; please review it and try again"
                    )
                cart.subtract(lines)
                drained = list(lines)
            self._storage.carts.save(cart)
        return drained
