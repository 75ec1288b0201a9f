"""Application services: order queries."""

from __future__ import annotations

from shophub.application.dto import OrderDTO
from shophub.domain.exceptions import EntityNotFoundError, ForbiddenError
from shophub.domain.model.value_objects import Customer, OrderId
from shophub.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, customer: Customer, order_id: OrderId) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        if order.user_id != customer.user_id and not customer.is_admin:
            raise ForbiddenError(f"Order #{order_id} belongs to another customer")
        return OrderDTO.of(order)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, customer: Customer, everyone: bool = False) -> list[OrderDTO]:
        """The caller's orders, newest first; admins may ask for all."""
        if everyone:
            if not customer.is_admin:
                raise ForbiddenError("Only admins can list every order")
            orders = self._order_repo.list_all()
        else:
            orders = self._order_repo.list_for_user(customer.user_id)
        return [OrderDTO.of(o) for o in orders]
