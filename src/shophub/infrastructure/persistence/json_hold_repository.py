"""JSON-document-backed implementation of HoldRepository."""

from __future__ import annotations

from datetime import datetime

from shophub.domain.model.reservation import StockHold
from shophub.domain.model.value_objects import CheckoutId, HoldId, ProductCode
from shophub.domain.repository.hold_repository import HoldRepository
from shophub.infrastructure.persistence.document_store import JsonDocumentStore


class JsonHoldRepository(HoldRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    def add(self, hold: StockHold) -> None:
        with self._store.transaction() as doc:
            doc["holds"][hold.id] = {
                "id": hold.id,
                "checkout_id": hold.checkout_id,
                "product_code": hold.product_code,
                "quantity": hold.quantity,
                "created_at": hold.created_at.isoformat(),
            }

    def delete(self, hold_id: HoldId) -> bool:
        with self._store.transaction() as doc:
            return doc["holds"].pop(hold_id, None) is not None

    def list_for_checkout(self, checkout_id: CheckoutId) -> list[StockHold]:
        return [h for h in self.list_all() if h.checkout_id == checkout_id]

    def list_created_before(self, cutoff: datetime) -> list[StockHold]:
        return [h for h in self.list_all() if h.created_at < cutoff]

    def list_all(self) -> list[StockHold]:
        with self._store.transaction() as doc:
            records = list(doc["holds"].values())
        holds = [
            StockHold(
                id=HoldId(raw["id"]),
                checkout_id=CheckoutId(raw["checkout_id"]),
                product_code=ProductCode(raw["product_code"]),
                quantity=raw["quantity"],
                created_at=datetime.fromisoformat(raw["created_at"]),
            )
            for raw in records
        ]
        return sorted(holds, key=lambda h: h.created_at)
