"""Application service: Advance Order Status use case (admin).

Orders only move forward: Pending -> Shipped -> Delivered.  Items and
total are never touched.
"""

from __future__ import annotations

import structlog

from shophub.application.dto import OrderDTO
from shophub.domain.exceptions import EntityNotFoundError, ForbiddenError, ValidationError
from shophub.domain.model.order import OrderStatus
from shophub.domain.model.value_objects import Customer, OrderId
from shophub.domain.repository.storage import Storage

logger = structlog.get_logger(__name__)


class AdvanceOrderStatusHandler:

    def __init__(self, storage: Storage) -> None:
        self._storage = storage

    def handle(self, customer: Customer, order_id: OrderId, status: str) -> OrderDTO:
        if not customer.is_admin:
            raise ForbiddenError("Only admins can change order status")
        try:
            new_status = OrderStatus(status.strip().capitalize())
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(f"Unknown status '{status}' (expected one of: {allowed})")

        with self._storage.atomic():
            order = self._storage.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            previous = order.status
            order.advance_to(new_status)
            self._storage.orders.save_status(order)

        logger.info(
            "order.status_changed",
            order_id=order_id,
            previous=previous.value,
            status=new_status.value,
            by=customer.user_id,
        )
        return OrderDTO.of(order)
