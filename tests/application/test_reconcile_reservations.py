"""Integration tests for the reservation reconciliation sweep."""

from datetime import datetime, timedelta, timezone

import pytest

from shophub.application.reconcile_reservations import ReconcileReservationsHandler
from shophub.application.show_inventory import ShowInventoryHandler
from shophub.domain.exceptions import ValidationError
from shophub.domain.model.product import Product
from shophub.domain.model.value_objects import CheckoutId, Money, ProductCode
from shophub.domain.service.inventory_ledger import InventoryLedger
from tests.fakes import FakeStorage

WIDGET = ProductCode(1)
TTL = timedelta(minutes=15)


def _setup() -> tuple[FakeStorage, InventoryLedger]:
    storage = FakeStorage([Product(code=WIDGET, name="Widget", price=Money.of("15.00"), stock=5)])
    return storage, InventoryLedger(storage)


class TestReconcileReservations:

    def test_abandoned_checkout_is_returned_to_stock(self):
        storage, ledger = _setup()
        # a checkout that reserved and then died before committing
        ledger.try_reserve(WIDGET, 3, CheckoutId("crashed"))
        assert ShowInventoryHandler(storage).handle()[0].held == 3

        later = datetime.now(timezone.utc) + TTL + timedelta(seconds=1)
        released = ReconcileReservationsHandler(ledger, TTL).handle(now=later)

        assert len(released) == 1
        [line] = ShowInventoryHandler(storage).handle()
        assert (line.in_stock, line.held) == (5, 0)

    def test_recent_checkout_is_left_alone(self):
        storage, ledger = _setup()
        ledger.try_reserve(WIDGET, 3, CheckoutId("in-flight"))

        released = ReconcileReservationsHandler(ledger, TTL).handle()

        assert released == []
        assert storage.products.get_by_code(WIDGET).stock == 2

    def test_running_twice_releases_once(self):
        storage, ledger = _setup()
        ledger.try_reserve(WIDGET, 3, CheckoutId("crashed"))
        later = datetime.now(timezone.utc) + TTL + timedelta(seconds=1)
        handler = ReconcileReservationsHandler(ledger, TTL)

        handler.handle(now=later)
        assert handler.handle(now=later) == []
        assert storage.products.get_by_code(WIDGET).stock == 5

    def test_ttl_must_be_positive(self):
        _, ledger = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            ReconcileReservationsHandler(ledger, timedelta(0)).handle()
