"""Domain service: Rating Aggregator.

Recomputes a product's ``rating`` and ``review_count`` from its complete
review set instead of nudging a running average.  The read and the write
share one transaction, so the last recompute to run always reflects every
review mutation committed before it.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

import structlog

from shophub.domain.exceptions import EntityNotFoundError
from shophub.domain.model.value_objects import ProductCode
from shophub.domain.repository.storage import Storage

logger = structlog.get_logger(__name__)

_ONE_DECIMAL = Decimal("0.1")


def average_rating(scores: list[int]) -> Decimal:
    """Mean of ``scores`` rounded half-up to one decimal, 0 when empty."""
    if not scores:
        return Decimal("0")
    mean = Decimal(sum(scores)) / Decimal(len(scores))
    return mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


class RatingAggregator:

    def __init__(self, storage: Storage) -> None:
        self._storage = storage

    def recompute(self, code: ProductCode) -> tuple[Decimal, int]:
        with self._storage.atomic():
            if self._storage.products.get_by_code(code) is None:
                raise EntityNotFoundError(f"Product #{code} not found")
            scores = [r.rating.value for r in self._storage.reviews.list_for_product(code)]
            rating = average_rating(scores)
            self._storage.products.set_rating(code, rating, len(scores))

        logger.debug("rating.recomputed", product_code=code, rating=str(rating), review_count=len(scores))
        return rating, len(scores)
