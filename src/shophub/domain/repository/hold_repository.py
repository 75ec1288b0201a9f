"""Abstract repository for stock holds (checkout reservations)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from shophub.domain.model.reservation import StockHold
from shophub.domain.model.value_objects import CheckoutId, HoldId


class HoldRepository(ABC):

    @abstractmethod
    def add(self, hold: StockHold) -> None:
        """Record a new hold."""

    @abstractmethod
    def delete(self, hold_id: HoldId) -> bool:
        """Remove a hold.  Returns False if it was already gone."""

    @abstractmethod
    def list_for_checkout(self, checkout_id: CheckoutId) -> list[StockHold]:
        """Return the holds taken by one checkout."""

    @abstractmethod
    def list_created_before(self, cutoff: datetime) -> list[StockHold]:
        """Return holds older than ``cutoff``."""

    @abstractmethod
    def list_all(self) -> list[StockHold]:
        """Return every open hold."""
