"""JSON-document-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from shophub.domain.model.product import Product
from shophub.domain.model.value_objects import Money, ProductCode
from shophub.domain.repository.product_repository import ProductRepository
from shophub.infrastructure.persistence.document_store import JsonDocumentStore


class JsonProductRepository(ProductRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    # --- ProductRepository interface ------------------------------------------

    def next_code(self) -> ProductCode:
        with self._store.transaction() as doc:
            codes = [int(key) for key in doc["products"]]
        return ProductCode(max(codes) + 1 if codes else 1)

    def get_by_code(self, code: ProductCode) -> Product | None:
        with self._store.transaction() as doc:
            raw = doc["products"].get(str(code))
        return self._to_domain(raw) if raw is not None else None

    def get_by_name(self, name: str) -> Product | None:
        for product in self.list_all():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        with self._store.transaction() as doc:
            records = list(doc["products"].values())
        return sorted((self._to_domain(raw) for raw in records), key=lambda p: p.code)

    def add(self, product: Product) -> None:
        with self._store.transaction() as doc:
            doc["products"][str(product.code)] = self._to_raw(product)

    def save_details(self, product: Product) -> None:
        with self._store.transaction() as doc:
            raw = doc["products"].get(str(product.code))
            if raw is None:
                doc["products"][str(product.code)] = self._to_raw(product)
                return
            fresh = self._to_raw(product)
            for key in ("name", "price", "currency", "category", "description"):
                raw[key] = fresh[key]

    def compare_and_set_stock(self, code: ProductCode, expected: int, new: int) -> bool:
        with self._store.transaction() as doc:
            raw = doc["products"].get(str(code))
            if raw is None or raw["stock"] != expected:
                return False
            raw["stock"] = new
            return True

    def set_rating(self, code: ProductCode, rating: Decimal, review_count: int) -> None:
        with self._store.transaction() as doc:
            raw = doc["products"][str(code)]
            raw["rating"] = str(rating)
            raw["review_count"] = review_count

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "code": product.code,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "rating": str(product.rating),
            "review_count": product.review_count,
            "category": product.category,
            "description": product.description,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            code=ProductCode(raw["code"]),
            name=raw["name"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "INR")),
            stock=raw["stock"],
            rating=Decimal(raw.get("rating", "0")),
            review_count=raw.get("review_count", 0),
            category=raw.get("category", ""),
            description=raw.get("description", ""),
        )
