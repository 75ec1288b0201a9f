"""The storage handle.

One ``Storage`` is built by the composition root and handed to every
component that touches persistent state.  It groups the repositories and
provides ``atomic()``: all repository calls made inside the outermost
``atomic()`` block commit together or not at all.  Blocks nest; an inner
block that raises rolls back to the state it started from.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from shophub.domain.repository.cart_repository import CartRepository
from shophub.domain.repository.hold_repository import HoldRepository
from shophub.domain.repository.order_repository import OrderRepository
from shophub.domain.repository.product_repository import ProductRepository
from shophub.domain.repository.review_repository import ReviewRepository


class Storage(ABC):

    products: ProductRepository
    carts: CartRepository
    orders: OrderRepository
    reviews: ReviewRepository
    holds: HoldRepository

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Open (or join) a storage transaction."""
