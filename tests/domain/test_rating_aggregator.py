"""Unit tests for the RatingAggregator domain service."""

from decimal import Decimal

import pytest

from shophub.domain.exceptions import EntityNotFoundError
from shophub.domain.model.product import Product
from shophub.domain.model.review import Review
from shophub.domain.model.value_objects import Customer, Money, ProductCode, UserId
from shophub.domain.service.rating_aggregator import RatingAggregator, average_rating
from tests.fakes import FakeStorage

WIDGET = ProductCode(1)


def _setup() -> tuple[RatingAggregator, FakeStorage]:
    storage = FakeStorage([Product(code=WIDGET, name="Widget", price=Money.of("15.00"))])
    return RatingAggregator(storage), storage


def _review(storage: FakeStorage, user: str, rating: int) -> Review:
    review = Review.write(Customer(UserId(user)), WIDGET, rating, "")
    storage.reviews.save(review)
    return review


class TestAverageRating:

    def test_empty_is_zero(self):
        assert average_rating([]) == Decimal("0")

    def test_rounds_half_up_to_one_decimal(self):
        assert average_rating([4, 5]) == Decimal("4.5")
        assert average_rating([4, 4, 5]) == Decimal("4.3")
        assert average_rating([4, 5, 5]) == Decimal("4.7")
        assert average_rating([1, 2, 2, 2, 2, 2, 2, 2]) == Decimal("1.9")

    def test_exact_half_rounds_up(self):
        # 3.25 -> 3.3
        assert average_rating([3, 3, 3, 4]) == Decimal("3.3")


class TestRecompute:

    def test_reflects_every_review(self):
        aggregator, storage = _setup()
        _review(storage, "u-1", 4)
        _review(storage, "u-2", 2)

        assert aggregator.recompute(WIDGET) == (Decimal("3.0"), 2)
        product = storage.products.get_by_code(WIDGET)
        assert product.rating == Decimal("3.0")
        assert product.review_count == 2

    def test_deleting_all_reviews_resets(self):
        aggregator, storage = _setup()
        first = _review(storage, "u-1", 4)
        second = _review(storage, "u-2", 2)
        aggregator.recompute(WIDGET)

        storage.reviews.delete(first.id)
        storage.reviews.delete(second.id)

        assert aggregator.recompute(WIDGET) == (Decimal("0"), 0)
        assert storage.products.get_by_code(WIDGET).review_count == 0

    def test_unknown_product(self):
        aggregator, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            aggregator.recompute(ProductCode(99))
