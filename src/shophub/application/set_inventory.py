"""Application service: Set Stock use case."""

from __future__ import annotations

from shophub.domain.exceptions import EntityNotFoundError
from shophub.domain.model.value_objects import ProductCode
from shophub.domain.repository.product_repository import ProductRepository
from shophub.domain.service.inventory_ledger import InventoryLedger


class SetStockHandler:

    def __init__(self, product_repo: ProductRepository, ledger: InventoryLedger) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(self, code: ProductCode, quantity: int) -> None:
        """Set the stock level for a product, through the ledger."""
        if self._product_repo.get_by_code(code) is None:
            raise EntityNotFoundError(f"Product #{code} not found")
        self._ledger.set_stock(code, quantity)
