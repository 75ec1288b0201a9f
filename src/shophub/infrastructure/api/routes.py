"""HTTP routes for the storefront core."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from shophub.application.dto import CartDTO, OrderDTO, ProductDTO, ReviewDTO
from shophub.domain.model.value_objects import Customer, OrderId, ProductCode, ReviewId
from shophub.infrastructure.api import schemas
from shophub.infrastructure.api.identity import current_customer, get_container
from shophub.infrastructure.bootstrap import Container

router = APIRouter()


# --- Mapping ------------------------------------------------------------------


def _product_out(dto: ProductDTO) -> schemas.ProductOut:
    return schemas.ProductOut(
        id=dto.code,
        name=dto.name,
        price=dto.price,
        stock=dto.stock,
        rating=dto.rating,
        review_count=dto.review_count,
        category=dto.category,
        description=dto.description,
    )


def _cart_out(dto: CartDTO) -> schemas.CartOut:
    return schemas.CartOut(
        items=[
            schemas.CartLineOut(
                product_id=item.product_code,
                name=item.product_name,
                quantity=item.quantity,
                price=item.unit_price,
                in_stock=item.in_stock,
            )
            for item in dto.items
        ],
        item_count=dto.item_count,
    )


def _order_out(dto: OrderDTO) -> schemas.OrderOut:
    return schemas.OrderOut(
        id=dto.id,
        user_id=dto.user_id,
        user_name=dto.user_name,
        status=dto.status,
        items=[
            schemas.OrderItemOut(
                product_id=item.product_code,
                name=item.product_name,
                quantity=item.quantity,
                price=item.unit_price,
            )
            for item in dto.items
        ],
        total_amount=dto.total,
        date=dto.placed_at,
    )


def _review_out(dto: ReviewDTO) -> schemas.ReviewOut:
    return schemas.ReviewOut(
        id=dto.id,
        product_id=dto.product_code,
        user_id=dto.author_id,
        author=dto.author_name,
        rating=dto.rating,
        comment=dto.comment,
        date=dto.created_at,
        edited=dto.edited,
    )


# --- Products -----------------------------------------------------------------


@router.get("/products", response_model=list[schemas.ProductOut], tags=["products"])
def list_products(container: Container = Depends(get_container)):
    return [_product_out(ProductDTO.of(p)) for p in container.storage.products.list_all()]


@router.get("/products/{code}", response_model=schemas.ProductOut, tags=["products"])
def get_product(code: int, container: Container = Depends(get_container)):
    product = container.storage.products.get_by_code(ProductCode(code))
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return _product_out(ProductDTO.of(product))


# --- Cart ---------------------------------------------------------------------


@router.get("/cart", response_model=schemas.CartOut, tags=["cart"])
def show_cart(
    customer: Customer = Depends(current_customer),
    container: Container = Depends(get_container),
):
    return _cart_out(container.show_cart().handle(customer))


@router.post("/cart", response_model=schemas.CartOut, tags=["cart"])
def add_to_cart(
    body: schemas.CartItemIn,
    customer: Customer = Depends(current_customer),
    container: Container = Depends(get_container),
):
    dto = container.add_to_cart().handle(customer, ProductCode(body.product_id), body.quantity)
    return _cart_out(dto)


@router.put("/cart", response_model=schemas.CartOut, tags=["cart"])
def update_cart(
    body: schemas.CartQuantityIn,
    customer: Customer = Depends(current_customer),
    container: Container = Depends(get_container),
):
    dto = container.update_cart().handle(customer, ProductCode(body.product_id), body.quantity)
    return _cart_out(dto)


@router.delete("/cart/{product_id}", response_model=schemas.CartOut, tags=["cart"])
def remove_from_cart(
    product_id: int,
    customer: Customer = Depends(current_customer),
    container: Container = Depends(get_container),
):
    return _cart_out(container.remove_from_cart().handle(customer, ProductCode(product_id)))


# --- Orders -------------------------------------------------------------------


@router.post(
    "/orders",
    response_model=schemas.OrderOut,
    status_code=status.HTTP_201_CREATED,
    tags=["orders"],
    responses={400: {"model": schemas.StockConflictOut}},
)
def place_order(
    customer: Customer = Depends(current_customer),
    container: Container = Depends(get_container),
):
    """Check out the caller's server-side cart.

    Prices and totals are computed here; nothing priced by the client is
    accepted.
    """
    return _order_out(container.place_order().handle(customer))


@router.get("/orders", response_model=list[schemas.OrderOut], tags=["orders"])
def list_orders(
    customer: Customer = Depends(current_customer),
    container: Container = Depends(get_container),
):
    return [_order_out(dto) for dto in container.list_orders().handle(customer)]


@router.get("/orders/{order_id}", response_model=schemas.OrderOut, tags=["orders"])
def get_order(
    order_id: int,
    customer: Customer = Depends(current_customer),
    container: Container = Depends(get_container),
):
    return _order_out(container.show_order().handle(customer, OrderId(order_id)))


@router.get("/admin/orders", response_model=list[schemas.OrderOut], tags=["admin"])
def list_all_orders(
    customer: Customer = Depends(current_customer),
    container: Container = Depends(get_container),
):
    return [_order_out(dto) for dto in container.list_orders().handle(customer, everyone=True)]


@router.put("/admin/orders/{order_id}/status", response_model=schemas.OrderOut, tags=["admin"])
def update_order_status(
    order_id: int,
    body: schemas.OrderStatusIn,
    customer: Customer = Depends(current_customer),
    container: Container = Depends(get_container),
):
    dto = container.advance_order_status().handle(customer, OrderId(order_id), body.status)
    return _order_out(dto)


# --- Reviews ------------------------------------------------------------------


@router.get("/products/{code}/reviews", response_model=list[schemas.ReviewOut], tags=["reviews"])
def list_reviews(code: int, container: Container = Depends(get_container)):
    return [_review_out(dto) for dto in container.list_reviews().handle(ProductCode(code))]


@router.post(
    "/products/{code}/reviews",
    response_model=schemas.ReviewOut,
    status_code=status.HTTP_201_CREATED,
    tags=["reviews"],
)
def add_review(
    code: int,
    body: schemas.ReviewIn,
    customer: Customer = Depends(current_customer),
    container: Container = Depends(get_container),
):
    dto = container.add_review().handle(customer, ProductCode(code), body.rating, body.comment)
    return _review_out(dto)


@router.put("/reviews/{review_id}", response_model=schemas.ReviewOut, tags=["reviews"])
def edit_review(
    review_id: str,
    body: schemas.ReviewEditIn,
    customer: Customer = Depends(current_customer),
    container: Container = Depends(get_container),
):
    dto = container.edit_review().handle(
        customer, ReviewId(review_id), rating=body.rating, comment=body.comment
    )
    return _review_out(dto)


@router.delete("/reviews/{review_id}", response_model=schemas.ReviewOut, tags=["reviews"])
def delete_review(
    review_id: str,
    customer: Customer = Depends(current_customer),
    container: Container = Depends(get_container),
):
    return _review_out(container.delete_review().handle(customer, ReviewId(review_id)))
