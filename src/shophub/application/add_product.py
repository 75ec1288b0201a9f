"""Application service: Add Product use case."""

from __future__ import annotations

from shophub.domain.exceptions import ValidationError
from shophub.domain.model.product import Product
from shophub.domain.model.value_objects import Money
from shophub.domain.repository.storage import Storage


class AddProductHandler:

    def __init__(self, storage: Storage, currency: str) -> None:
        self._storage = storage
        self._currency = currency

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        category: str = "",
        description: str = "",
    ) -> Product:
        """Add a new product to the catalogue with its opening stock."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not isinstance(stock, int) or stock < 0:
            raise ValidationError("Opening stock must be a non-negative integer")

        money = Money.of(price, self._currency)
        if money.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        with self._storage.atomic():
            if self._storage.products.get_by_name(name.strip()) is not None:
                raise ValidationError(f"Product '{name.strip()}' already exists")

            product = Product(
                code=self._storage.products.next_code(),
                name=name.strip(),
                price=money,
                stock=stock,
                category=category.strip(),
                description=description.strip(),
            )
            self._storage.products.add(product)
        return product
