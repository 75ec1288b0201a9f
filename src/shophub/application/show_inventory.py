"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from shophub.domain.repository.storage import Storage


@dataclass(frozen=True)
class InventoryLineDTO:
    product_code: int
    product_name: str
    in_stock: int
    held: int  # taken by checkouts that have not committed yet


class ShowInventoryHandler:

    def __init__(self, storage: Storage) -> None:
        self._storage = storage

    def handle(self) -> list[InventoryLineDTO]:
        held: dict[int, int] = {}
        for hold in self._storage.holds.list_all():
            held[hold.product_code] = held.get(hold.product_code, 0) + hold.quantity

        return [
            InventoryLineDTO(
                product_code=product.code,
                product_name=product.name,
                in_stock=product.stock,
                held=held.get(product.code, 0),
            )
            for product in self._storage.products.list_all()
        ]
