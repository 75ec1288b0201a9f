"""JSON-document-backed implementation of CartRepository."""

from __future__ import annotations

from shophub.domain.model.cart import Cart
from shophub.domain.model.value_objects import ProductCode, UserId
from shophub.domain.repository.cart_repository import CartRepository
from shophub.infrastructure.persistence.document_store import JsonDocumentStore


class JsonCartRepository(CartRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    def get(self, user_id: UserId) -> Cart | None:
        with self._store.transaction() as doc:
            raw = doc["carts"].get(user_id)
        if raw is None:
            return None
        return Cart(
            user_id=UserId(raw["user_id"]),
            entries={ProductCode(e["product_code"]): e["quantity"] for e in raw["entries"]},
        )

    def save(self, cart: Cart) -> None:
        with self._store.transaction() as doc:
            doc["carts"][cart.user_id] = {
                "user_id": cart.user_id,
                "entries": [
                    {"product_code": code, "quantity": qty}
                    for code, qty in cart.entries.items()
                ],
            }
