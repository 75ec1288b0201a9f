"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations live in the infrastructure
layer (JSON) and in the test suite (in-memory).

Stock has no free-form setter: the only write path is
``compare_and_set_stock``, which the Inventory Ledger drives.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from shophub.domain.model.product import Product
from shophub.domain.model.value_objects import ProductCode


class ProductRepository(ABC):

    @abstractmethod
    def next_code(self) -> ProductCode:
        """Return the next unused sequential product code."""

    @abstractmethod
    def get_by_code(self, code: ProductCode) -> Product | None:
        """Return a product by its code, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalogue, ordered by code."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Insert a new product record, including its initial stock."""

    @abstractmethod
    def save_details(self, product: Product) -> None:
        """Update descriptive fields (name, price, category, description).

        Stock and rating aggregates stored for the product are left as they
        are, whatever values the passed object carries.
        """

    @abstractmethod
    def compare_and_set_stock(self, code: ProductCode, expected: int, new: int) -> bool:
        """Set stock to ``new`` only if it currently equals ``expected``.

        Returns False (and changes nothing) when the stored value differs
        or the product does not exist.
        """

    @abstractmethod
    def set_rating(self, code: ProductCode, rating: Decimal, review_count: int) -> None:
        """Write both rating aggregates in one update."""
