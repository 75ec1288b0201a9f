"""Application services: cart use cases.

Every handler returns the cart as it stands after the mutation.
"""

from __future__ import annotations

from shophub.application.dto import CartDTO, cart_dto
from shophub.domain.exceptions import UnknownProductError, ValidationError
from shophub.domain.model.cart import Cart
from shophub.domain.model.value_objects import Customer, ProductCode
from shophub.domain.repository.storage import Storage
from shophub.domain.service.cart_store import CartStore


class _CartHandler:

    def __init__(self, storage: Storage, cart_store: CartStore) -> None:
        self._storage = storage
        self._cart_store = cart_store

    def _require_product(self, code: ProductCode) -> None:
        if self._storage.products.get_by_code(code) is None:
            raise UnknownProductError(f"Product #{code} not found")

    def _to_dto(self, cart: Cart) -> CartDTO:
        products = {}
        for code in cart.entries:
            product = self._storage.products.get_by_code(code)
            if product is not None:
                products[code] = product
        return cart_dto(cart, products)


class ShowCartHandler(_CartHandler):

    def handle(self, customer: Customer) -> CartDTO:
        return self._to_dto(self._cart_store.get(customer.user_id))


class AddToCartHandler(_CartHandler):

    def handle(self, customer: Customer, code: ProductCode, quantity: int = 1) -> CartDTO:
        """Add ``quantity`` units, merging with an existing line."""
        if not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError("Quantity must be positive")
        self._require_product(code)
        cart = self._cart_store.add(customer.user_id, code, quantity)
        return self._to_dto(cart)


class UpdateCartHandler(_CartHandler):

    def handle(self, customer: Customer, code: ProductCode, quantity: int) -> CartDTO:
        """Replace a line's quantity; zero or less removes the line."""
        if not isinstance(quantity, int):
            raise ValidationError("Quantity must be an integer")
        if quantity > 0:
            self._require_product(code)
        cart = self._cart_store.set_quantity(customer.user_id, code, quantity)
        return self._to_dto(cart)


class RemoveFromCartHandler(_CartHandler):

    def handle(self, customer: Customer, code: ProductCode) -> CartDTO:
        cart = self._cart_store.remove(customer.user_id, code)
        return self._to_dto(cart)
