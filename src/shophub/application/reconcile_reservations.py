"""Application service: Reconcile Reservations use case.

Releases stock held by checkouts that started more than ``ttl`` ago and
never committed (the process died, or storage failed between reserving
and saving the order).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from shophub.domain.exceptions import ValidationError
from shophub.domain.model.reservation import StockHold
from shophub.domain.service.inventory_ledger import InventoryLedger


class ReconcileReservationsHandler:

    def __init__(self, ledger: InventoryLedger, ttl: timedelta) -> None:
        self._ledger = ledger
        self._ttl = ttl

    def handle(self, now: datetime | None = None) -> list[StockHold]:
        if self._ttl <= timedelta(0):
            raise ValidationError("Reservation time-to-live must be positive")
        cutoff = (now or datetime.now(timezone.utc)) - self._ttl
        return self._ledger.release_expired_holds(cutoff)
