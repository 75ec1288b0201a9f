"""JSON-file-backed ``Storage``: one document store, five repositories."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from shophub.domain.repository.storage import Storage
from shophub.infrastructure.persistence.document_store import JsonDocumentStore
from shophub.infrastructure.persistence.json_cart_repository import JsonCartRepository
from shophub.infrastructure.persistence.json_hold_repository import JsonHoldRepository
from shophub.infrastructure.persistence.json_order_repository import JsonOrderRepository
from shophub.infrastructure.persistence.json_product_repository import JsonProductRepository
from shophub.infrastructure.persistence.json_review_repository import JsonReviewRepository


class JsonStorage(Storage):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonDocumentStore(file_path)
        self.products = JsonProductRepository(self._store)
        self.carts = JsonCartRepository(self._store)
        self.orders = JsonOrderRepository(self._store)
        self.reviews = JsonReviewRepository(self._store)
        self.holds = JsonHoldRepository(self._store)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._store.transaction():
            yield
