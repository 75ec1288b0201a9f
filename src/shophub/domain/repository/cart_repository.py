"""Abstract repository for Cart aggregates."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shophub.domain.model.cart import Cart
from shophub.domain.model.value_objects import UserId


class CartRepository(ABC):

    @abstractmethod
    def get(self, user_id: UserId) -> Cart | None:
        """Return the user's stored cart, or None if they never had one."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart."""
