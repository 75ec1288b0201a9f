"""Tests for the periodic reservation sweep and its wiring into the API."""

import threading
import time
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from shophub.domain.model.product import Product
from shophub.domain.model.reservation import StockHold
from shophub.domain.model.value_objects import CheckoutId, HoldId, Money, ProductCode
from shophub.infrastructure.api.app import create_app
from shophub.infrastructure.bootstrap import build_container
from shophub.infrastructure.config import Settings
from shophub.infrastructure.reservation_sweeper import ReservationSweeper
from tests.fakes import FakeNotifier, FakeStorage

WIDGET = ProductCode(1)


class _CountingSweep:

    def __init__(self, fail_first: int = 0) -> None:
        self.calls = 0
        self._fail_first = fail_first
        self.reached = threading.Event()

    def __call__(self) -> None:
        self.calls += 1
        if self.calls >= 3:
            self.reached.set()
        if self.calls <= self._fail_first:
            raise RuntimeError("storage unavailable")


def _crashed_checkout_storage() -> FakeStorage:
    """Widget with 3 of its 5 units held by a checkout that died an hour ago."""
    storage = FakeStorage([Product(code=WIDGET, name="Widget", price=Money.of("15.00"), stock=2)])
    storage.holds.add(StockHold(
        id=HoldId("h-1"),
        checkout_id=CheckoutId("crashed"),
        product_code=WIDGET,
        quantity=3,
        created_at=datetime.now(timezone.utc) - timedelta(hours=1),
    ))
    return storage


def _wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.05)
    return predicate()


class TestReservationSweeper:

    def test_sweeps_repeatedly_until_stopped(self):
        sweep = _CountingSweep()
        sweeper = ReservationSweeper(sweep, interval=0.01)

        sweeper.start()
        assert sweep.reached.wait(timeout=5)
        sweeper.stop()

        assert not sweeper.running
        calls = sweep.calls
        time.sleep(0.05)
        assert sweep.calls == calls

    def test_failed_sweep_does_not_stop_the_loop(self):
        sweep = _CountingSweep(fail_first=2)
        sweeper = ReservationSweeper(sweep, interval=0.01)

        sweeper.start()
        try:
            assert sweep.reached.wait(timeout=5)
        finally:
            sweeper.stop()

    def test_start_is_idempotent(self):
        sweeper = ReservationSweeper(_CountingSweep(), interval=10)
        sweeper.start()
        thread = sweeper._thread
        sweeper.start()
        try:
            assert sweeper._thread is thread
        finally:
            sweeper.stop()

    def test_interval_must_be_positive(self):
        with pytest.raises(ValueError, match="must be positive"):
            ReservationSweeper(_CountingSweep(), interval=0)


class TestSweeperWiring:

    def test_disabled_by_zero_interval(self, tmp_path):
        settings = Settings(data_file=tmp_path / "unused.json", sweep_interval_seconds=0)
        container = build_container(settings, storage=FakeStorage(), notifier=FakeNotifier())

        assert container.start_sweeper() is None
        container.close()

    def test_close_stops_the_sweeper(self, tmp_path):
        settings = Settings(data_file=tmp_path / "unused.json", sweep_interval_seconds=60)
        container = build_container(settings, storage=FakeStorage(), notifier=FakeNotifier())

        sweeper = container.start_sweeper()
        assert sweeper.running
        container.close()
        assert not sweeper.running

    def test_api_startup_schedules_the_sweep(self, tmp_path):
        storage = _crashed_checkout_storage()
        settings = Settings(data_file=tmp_path / "unused.json", sweep_interval_seconds=1)
        container = build_container(settings, storage=storage, notifier=FakeNotifier())

        with TestClient(create_app(container)) as client:
            assert container.sweeper is not None and container.sweeper.running
            assert _wait_for(lambda: storage.holds.list_all() == [])
            assert client.get("/products/1").json()["stock"] == 5

        assert not container.sweeper.running
