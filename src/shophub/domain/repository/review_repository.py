"""Abstract repository for Review entities."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shophub.domain.model.review import Review
from shophub.domain.model.value_objects import ProductCode, ReviewId


class ReviewRepository(ABC):

    @abstractmethod
    def get_by_id(self, review_id: ReviewId) -> Review | None:
        """Return a review by its ID, or None if not found."""

    @abstractmethod
    def list_for_product(self, code: ProductCode) -> list[Review]:
        """Return every current review of a product, oldest first."""

    @abstractmethod
    def save(self, review: Review) -> None:
        """Persist a new or updated review."""

    @abstractmethod
    def delete(self, review_id: ReviewId) -> bool:
        """Remove a review.  Returns False if it did not exist."""
