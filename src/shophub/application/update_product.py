"""Application service: Update Product use case."""

from __future__ import annotations

from shophub.domain.exceptions import EntityNotFoundError, ValidationError
from shophub.domain.model.product import Product
from shophub.domain.model.value_objects import Money, ProductCode
from shophub.domain.repository.storage import Storage


class UpdateProductHandler:

    def __init__(self, storage: Storage) -> None:
        self._storage = storage

    def handle(
        self,
        code: ProductCode,
        new_price: str | None = None,
        new_name: str | None = None,
    ) -> Product:
        """Update a product's price and/or name.

        This does NOT affect any existing orders; they captured a
        snapshot when they were placed.  Stock is not editable here;
        see ``SetStockHandler``.
        """
        if new_price is None and new_name is None:
            raise ValidationError("Nothing to update")

        with self._storage.atomic():
            product = self._storage.products.get_by_code(code)
            if product is None:
                raise EntityNotFoundError(f"Product #{code} not found")

            if new_name is not None:
                clash = self._storage.products.get_by_name(new_name.strip())
                if clash is not None and clash.code != code:
                    raise ValidationError(f"Product '{new_name.strip()}' already exists")
                product.rename(new_name)
            if new_price is not None:
                product.update_price(Money.of(new_price, product.price.currency))

            self._storage.products.save_details(product)
        return product
