"""Request and response bodies for the HTTP API."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class ProductOut(BaseModel):
    id: int
    name: str
    price: Decimal
    stock: int
    rating: Decimal
    review_count: int
    category: str = ""
    description: str = ""


class CartItemIn(BaseModel):
    product_id: int = Field(..., gt=0, description="Product code")
    quantity: int = Field(1, gt=0, description="Units to add")


class CartQuantityIn(BaseModel):
    product_id: int = Field(..., gt=0, description="Product code")
    quantity: int = Field(..., description="New quantity; 0 or less removes the line")


class CartLineOut(BaseModel):
    product_id: int
    name: str
    quantity: int
    price: str
    in_stock: int


class CartOut(BaseModel):
    items: list[CartLineOut]
    item_count: int


class OrderItemOut(BaseModel):
    product_id: int
    name: str
    quantity: int
    price: Decimal


class OrderOut(BaseModel):
    id: int
    user_id: str
    user_name: str
    status: str
    items: list[OrderItemOut]
    total_amount: Decimal
    date: str


class OrderStatusIn(BaseModel):
    status: str = Field(..., description="Next status: Shipped or Delivered")


class ConflictItemOut(BaseModel):
    product_id: int
    name: str
    requested: int
    available: int
    in_stock: bool


class StockConflictOut(BaseModel):
    message: str
    unavailable: list[int]
    items: list[ConflictItemOut]


class ReviewIn(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str = ""


class ReviewEditIn(BaseModel):
    rating: int | None = Field(None, ge=1, le=5)
    comment: str | None = None


class ReviewOut(BaseModel):
    id: str
    product_id: int
    user_id: str
    author: str
    rating: int
    comment: str
    date: str
    edited: bool
