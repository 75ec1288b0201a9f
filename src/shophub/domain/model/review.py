"""Review entity.

A user may leave any number of reviews for the same product.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from shophub.domain.model.value_objects import (
    Customer,
    ProductCode,
    Rating,
    ReviewId,
    UserId,
    new_token,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Review:
    id: ReviewId
    product_code: ProductCode
    author_id: UserId
    author_name: str
    rating: Rating
    comment: str = ""
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime | None = None

    @staticmethod
    def write(customer: Customer, product_code: ProductCode, rating: int, comment: str) -> Review:
        return Review(
            id=ReviewId(new_token()),
            product_code=product_code,
            author_id=customer.user_id,
            author_name=customer.display_name,
            rating=Rating(rating),
            comment=(comment or "").strip(),
        )

    def is_by(self, customer: Customer) -> bool:
        return self.author_id == customer.user_id

    def edit(self, rating: int | None = None, comment: str | None = None) -> None:
        if rating is not None:
            self.rating = Rating(rating)
        if comment is not None:
            self.comment = comment.strip()
        self.updated_at = _now()
