"""Periodic release of stale stock holds on a background thread."""

from __future__ import annotations

import threading
from collections.abc import Callable

import structlog

logger = structlog.get_logger(__name__)


class ReservationSweeper:
    """Calls ``sweep`` every ``interval`` seconds until stopped.

    A failing sweep is logged and the next one runs on schedule.
    """

    def __init__(self, sweep: Callable[[], object], interval: float) -> None:
        if interval <= 0:
            raise ValueError(f"Sweep interval must be positive, got {interval!r}")
        self._sweep = sweep
        self._interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="shophub-sweeper", daemon=True
        )
        self._thread.start()
        logger.info("reservations.sweeper_started", interval=self._interval)

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
            logger.info("reservations.sweeper_stopped")

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self._sweep()
            except Exception:
                logger.exception("reservations.sweep_failed")
