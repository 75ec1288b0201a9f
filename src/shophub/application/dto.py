"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI / HTTP layers and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from shophub.domain.model.cart import Cart
from shophub.domain.model.order import Order
from shophub.domain.model.product import Product
from shophub.domain.model.review import Review

_DATE_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class ProductDTO:
    code: int
    name: str
    price: Decimal
    price_display: str
    stock: int
    rating: Decimal
    review_count: int
    category: str
    description: str

    @staticmethod
    def of(product: Product) -> ProductDTO:
        return ProductDTO(
            code=product.code,
            name=product.name,
            price=product.price.amount,
            price_display=str(product.price),
            stock=product.stock,
            rating=product.rating,
            review_count=product.review_count,
            category=product.category,
            description=product.description,
        )


@dataclass(frozen=True)
class CartLineDTO:
    """A cart line priced at the *current* catalogue price (display only)."""

    product_code: int
    product_name: str
    quantity: int
    unit_price: str
    in_stock: int


@dataclass(frozen=True)
class CartDTO:
    user_id: str
    items: list[CartLineDTO]

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


@dataclass(frozen=True)
class OrderLineItemDTO:
    """A single order line as displayed to the user."""

    product_code: int
    product_name: str
    quantity: int
    unit_price: Decimal
    unit_price_display: str  # formatted, e.g. "₹15.00"
    line_total_display: str


@dataclass(frozen=True)
class OrderDTO:
    """A complete order as displayed to the user."""

    id: int
    user_id: str
    user_name: str
    status: str
    items: list[OrderLineItemDTO]
    total: Decimal
    total_display: str
    placed_at: str

    @staticmethod
    def of(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            user_id=order.user_id,
            user_name=order.user_name,
            status=order.status.value,
            items=[
                OrderLineItemDTO(
                    product_code=item.product_code,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    unit_price_display=str(item.unit_price),
                    line_total_display=str(item.line_total.rounded()),
                )
                for item in order.items
            ],
            total=order.total.amount,
            total_display=str(order.total),
            placed_at=order.placed_at.strftime(_DATE_FORMAT),
        )


@dataclass(frozen=True)
class ReviewDTO:
    id: str
    product_code: int
    author_id: str
    author_name: str
    rating: int
    comment: str
    created_at: str
    edited: bool

    @staticmethod
    def of(review: Review) -> ReviewDTO:
        return ReviewDTO(
            id=review.id,
            product_code=review.product_code,
            author_id=review.author_id,
            author_name=review.author_name,
            rating=review.rating.value,
            comment=review.comment,
            created_at=review.created_at.strftime(_DATE_FORMAT),
            edited=review.updated_at is not None,
        )


def cart_dto(cart: Cart, products: dict[int, Product]) -> CartDTO:
    """Map a cart, naming lines whose product has since left the catalogue."""
    items: list[CartLineDTO] = []
    for line in cart.lines():
        product = products.get(line.product_code)
        items.append(
            CartLineDTO(
                product_code=line.product_code,
                product_name=product.name if product else f"#{line.product_code} (unavailable)",
                quantity=line.quantity,
                unit_price=str(product.price) if product else "-",
                in_stock=product.stock if product else 0,
            )
        )
    return CartDTO(user_id=cart.user_id, items=items)
