"""JSON-document-backed implementation of ReviewRepository."""

from __future__ import annotations

from datetime import datetime

from shophub.domain.model.review import Review
from shophub.domain.model.value_objects import ProductCode, Rating, ReviewId, UserId
from shophub.domain.repository.review_repository import ReviewRepository
from shophub.infrastructure.persistence.document_store import JsonDocumentStore


class JsonReviewRepository(ReviewRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    def get_by_id(self, review_id: ReviewId) -> Review | None:
        with self._store.transaction() as doc:
            raw = doc["reviews"].get(review_id)
        return self._to_domain(raw) if raw is not None else None

    def list_for_product(self, code: ProductCode) -> list[Review]:
        with self._store.transaction() as doc:
            records = [r for r in doc["reviews"].values() if r["product_code"] == code]
        return sorted((self._to_domain(r) for r in records), key=lambda r: r.created_at)

    def save(self, review: Review) -> None:
        with self._store.transaction() as doc:
            doc["reviews"][review.id] = self._to_raw(review)

    def delete(self, review_id: ReviewId) -> bool:
        with self._store.transaction() as doc:
            return doc["reviews"].pop(review_id, None) is not None

    @staticmethod
    def _to_raw(review: Review) -> dict:
        return {
            "id": review.id,
            "product_code": review.product_code,
            "author_id": review.author_id,
            "author_name": review.author_name,
            "rating": review.rating.value,
            "comment": review.comment,
            "created_at": review.created_at.isoformat(),
            "updated_at": review.updated_at.isoformat() if review.updated_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Review:
        return Review(
            id=ReviewId(raw["id"]),
            product_code=ProductCode(raw["product_code"]),
            author_id=UserId(raw["author_id"]),
            author_name=raw.get("author_name", ""),
            rating=Rating(raw["rating"]),
            comment=raw.get("comment", ""),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]) if raw.get("updated_at") else None,
        )
