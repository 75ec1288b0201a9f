"""Application services: review use cases.

Each mutation commits the review first, then asks the Rating Aggregator
to recompute the product's aggregates from the full review set.
"""

from __future__ import annotations

from shophub.application.dto import ReviewDTO
from shophub.domain.exceptions import EntityNotFoundError, ForbiddenError
from shophub.domain.model.review import Review
from shophub.domain.model.value_objects import Customer, ProductCode, ReviewId
from shophub.domain.repository.storage import Storage
from shophub.domain.service.rating_aggregator import RatingAggregator


class _ReviewHandler:

    def __init__(self, storage: Storage, aggregator: RatingAggregator) -> None:
        self._storage = storage
        self._aggregator = aggregator

    def _get(self, review_id: ReviewId) -> Review:
        review = self._storage.reviews.get_by_id(review_id)
        if review is None:
            raise EntityNotFoundError(f"Review {review_id} not found")
        return review


class AddReviewHandler(_ReviewHandler):

    def handle(
        self, customer: Customer, code: ProductCode, rating: int, comment: str = ""
    ) -> ReviewDTO:
        if self._storage.products.get_by_code(code) is None:
            raise EntityNotFoundError(f"Product #{code} not found")

        review = Review.write(customer, code, rating, comment)
        self._storage.reviews.save(review)
        self._aggregator.recompute(code)
        return ReviewDTO.of(review)


class EditReviewHandler(_ReviewHandler):

    def handle(
        self,
        customer: Customer,
        review_id: ReviewId,
        rating: int | None = None,
        comment: str | None = None,
    ) -> ReviewDTO:
        """Change a review's score and/or text.  Only its author may."""
        review = self._get(review_id)
        if not review.is_by(customer):
            raise ForbiddenError("You can only edit your own reviews")

        review.edit(rating=rating, comment=comment)
        self._storage.reviews.save(review)
        self._aggregator.recompute(review.product_code)
        return ReviewDTO.of(review)


class DeleteReviewHandler(_ReviewHandler):

    def handle(self, customer: Customer, review_id: ReviewId) -> ReviewDTO:
        """Remove a review.  Its author or an admin may."""
        review = self._get(review_id)
        if not (review.is_by(customer) or customer.is_admin):
            raise ForbiddenError("You can only delete your own reviews")

        if not self._storage.reviews.delete(review_id):
            raise EntityNotFoundError(f"Review {review_id} not found")
        self._aggregator.recompute(review.product_code)
        return ReviewDTO.of(review)


class ListReviewsHandler(_ReviewHandler):

    def handle(self, code: ProductCode) -> list[ReviewDTO]:
        if self._storage.products.get_by_code(code) is None:
            raise EntityNotFoundError(f"Product #{code} not found")
        return [ReviewDTO.of(r) for r in self._storage.reviews.list_for_product(code)]
