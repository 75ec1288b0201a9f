"""Detached delivery: hand notifications to a worker pool and move on."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor

import structlog

from shophub.application.dto import OrderDTO
from shophub.application.notifier import Notifier
from shophub.domain.model.value_objects import Customer

logger = structlog.get_logger(__name__)


class BackgroundNotifier(Notifier):
    """Runs another notifier on a thread pool.

    ``order_placed`` returns as soon as the job is queued.  Failures are
    reported to the log from the worker, never to the caller.
    """

    def __init__(self, inner: Notifier, max_workers: int = 2) -> None:
        self._inner = inner
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="shophub-notify"
        )

    def order_placed(self, recipient: Customer, order: OrderDTO) -> Future:
        future = self._executor.submit(self._inner.order_placed, recipient, order)
        future.add_done_callback(lambda f: self._report(f, order))
        return future

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _report(future: Future, order: OrderDTO) -> None:
        exc = future.exception()
        if exc is not None:
            logger.error(
                "notify.failed",
                order_id=order.id,
                error=repr(exc),
                exc_info=(type(exc), exc, exc.__traceback__),
            )
