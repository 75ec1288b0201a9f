"""Unit tests for the Order aggregate."""

from decimal import Decimal

import pytest

from shophub.domain.exceptions import ValidationError
from shophub.domain.model.order import Order, OrderLineItem, OrderStatus
from shophub.domain.model.value_objects import (
    Customer,
    Money,
    ProductCode,
    Quantity,
    UserId,
)

ASHA = Customer(UserId("u-asha"), name="Asha")


def _item(code: int, name: str, qty: int, price: str, currency: str = "INR") -> OrderLineItem:
    return OrderLineItem(
        product_code=ProductCode(code),
        product_name=name,
        quantity=Quantity(qty),
        unit_price=Money.of(price, currency),
    )


class TestOrderPlace:

    def test_new_order_is_pending_without_id(self):
        order = Order.place(ASHA, [_item(1, "Widget", 2, "15.00")])
        assert order.id is None
        assert order.status == OrderStatus.PENDING
        assert order.user_id == "u-asha"
        assert order.user_name == "Asha"

    def test_empty_order_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.place(ASHA, [])

    def test_mixed_currencies_rejected(self):
        with pytest.raises(ValidationError, match="mixes currencies"):
            Order.place(ASHA, [_item(1, "A", 1, "1", "INR"), _item(2, "B", 1, "1", "USD")])


class TestOrderTotal:

    def test_total_is_sum_of_lines(self):
        order = Order.place(ASHA, [_item(1, "Widget", 3, "15.00"), _item(2, "Gadget", 5, "25.00")])
        assert order.total == Money.of("170.00")
        assert order.item_count == 8

    def test_total_rounded_once(self):
        # rounding each line first would give 1.02
        order = Order.place(
            ASHA,
            [_item(1, "A", 1, "0.335"), _item(2, "B", 1, "0.335"), _item(3, "C", 1, "0.335")],
        )
        assert order.total.amount == Decimal("1.01")

    def test_line_total_keeps_precision(self):
        assert _item(1, "A", 3, "0.335").line_total.amount == Decimal("1.005")


class TestOrderStatus:

    def _order(self) -> Order:
        order = Order.place(ASHA, [_item(1, "Widget", 1, "15.00")])
        order.id = 7
        return order

    def test_moves_forward_one_step(self):
        order = self._order()
        order.advance_to(OrderStatus.SHIPPED)
        order.advance_to(OrderStatus.DELIVERED)
        assert order.status == OrderStatus.DELIVERED

    def test_cannot_skip_a_step(self):
        order = self._order()
        with pytest.raises(ValidationError, match="next status is Shipped"):
            order.advance_to(OrderStatus.DELIVERED)

    def test_cannot_go_backwards(self):
        order = self._order()
        order.advance_to(OrderStatus.SHIPPED)
        with pytest.raises(ValidationError, match="next status is Delivered"):
            order.advance_to(OrderStatus.PENDING)

    def test_delivered_is_final(self):
        order = self._order()
        order.advance_to(OrderStatus.SHIPPED)
        order.advance_to(OrderStatus.DELIVERED)
        with pytest.raises(ValidationError, match="already Delivered"):
            order.advance_to(OrderStatus.DELIVERED)

    def test_status_change_leaves_items_alone(self):
        order = self._order()
        before = (order.items, order.total)
        order.advance_to(OrderStatus.SHIPPED)
        assert (order.items, order.total) == before
