"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shophub.domain.model.order import Order
from shophub.domain.model.value_objects import OrderId, UserId


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> OrderId:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: OrderId) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_for_user(self, user_id: UserId) -> list[Order]:
        """Return the user's orders, newest first."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order.  ``order.id`` must already be assigned."""

    @abstractmethod
    def save_status(self, order: Order) -> None:
        """Persist a status change.  Items and total are never rewritten."""
