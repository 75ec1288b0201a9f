"""JSON-document-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from shophub.domain.model.order import Order, OrderLineItem, OrderStatus
from shophub.domain.model.value_objects import Money, OrderId, ProductCode, Quantity, UserId
from shophub.domain.repository.order_repository import OrderRepository
from shophub.infrastructure.persistence.document_store import JsonDocumentStore


class JsonOrderRepository(OrderRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> OrderId:
        with self._store.transaction() as doc:
            ids = [int(key) for key in doc["orders"]]
        return OrderId(max(ids) + 1 if ids else 1)

    def get_by_id(self, order_id: OrderId) -> Order | None:
        with self._store.transaction() as doc:
            raw = doc["orders"].get(str(order_id))
        return self._to_domain(raw) if raw is not None else None

    def list_for_user(self, user_id: UserId) -> list[Order]:
        return [o for o in self.list_all() if o.user_id == user_id]

    def list_all(self) -> list[Order]:
        with self._store.transaction() as doc:
            records = list(doc["orders"].values())
        orders = [self._to_domain(raw) for raw in records]
        return sorted(orders, key=lambda o: (o.placed_at, o.id), reverse=True)

    def add(self, order: Order) -> None:
        if order.id is None:
            raise ValueError("Order id must be assigned before it is stored")
        with self._store.transaction() as doc:
            if str(order.id) in doc["orders"]:
                raise ValueError(f"Order #{order.id} already exists")
            doc["orders"][str(order.id)] = self._to_raw(order)

    def save_status(self, order: Order) -> None:
        with self._store.transaction() as doc:
            doc["orders"][str(order.id)]["status"] = order.status.value

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "user_name": order.user_name,
            "status": order.status.value,
            "placed_at": order.placed_at.isoformat(),
            "total_amount": str(order.total.amount),
            "items": [
                {
                    "product_code": item.product_code,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = tuple(
            OrderLineItem(
                product_code=ProductCode(i["product_code"]),
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "INR")),
            )
            for i in raw["items"]
        )
        return Order(
            id=OrderId(raw["id"]),
            user_id=UserId(raw["user_id"]),
            user_name=raw.get("user_name", ""),
            items=items,
            status=OrderStatus(raw["status"]),
            placed_at=datetime.fromisoformat(raw["placed_at"]),
        )
