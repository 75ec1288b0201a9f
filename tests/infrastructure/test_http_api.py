"""Integration tests for the HTTP API via TestClient."""

import pytest
from fastapi.testclient import TestClient

from shophub.domain.model.product import Product
from shophub.domain.model.value_objects import Money, ProductCode
from shophub.infrastructure.api.app import create_app
from shophub.infrastructure.bootstrap import build_container
from shophub.infrastructure.config import Settings
from tests.fakes import FakeNotifier, FakeStorage

ASHA = {"X-User-Id": "u-asha", "X-User-Name": "Asha", "X-User-Email": "asha@example.com"}
RAVI = {"X-User-Id": "u-ravi", "X-User-Name": "Ravi"}
ADMIN = {"X-User-Id": "u-admin", "X-User-Role": "admin"}


@pytest.fixture()
def storage():
    return FakeStorage([
        Product(code=ProductCode(1), name="Widget", price=Money.of("15.00"), stock=5),
        Product(code=ProductCode(2), name="Gadget", price=Money.of("25.00"), stock=1),
    ])


@pytest.fixture()
def notifier():
    return FakeNotifier()


@pytest.fixture()
def client(tmp_path, storage, notifier):
    settings = Settings(data_file=tmp_path / "unused.json")
    container = build_container(settings, storage=storage, notifier=notifier)
    return TestClient(create_app(container))


def _fill_cart(client, headers, *lines):
    for product_id, quantity in lines:
        response = client.post("/cart", json={"product_id": product_id, "quantity": quantity}, headers=headers)
        assert response.status_code == 200


class TestCatalogue:

    def test_list_products(self, client):
        response = client.get("/products")
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Widget", "Gadget"]

    def test_unknown_product(self, client):
        assert client.get("/products/99").status_code == 404


class TestCart:

    def test_requires_identity(self, client):
        assert client.get("/cart").status_code == 401

    def test_add_update_remove(self, client):
        _fill_cart(client, ASHA, (1, 2), (2, 1))

        response = client.put("/cart", json={"product_id": 1, "quantity": 4}, headers=ASHA)
        assert {i["product_id"]: i["quantity"] for i in response.json()["items"]} == {1: 4, 2: 1}

        response = client.delete("/cart/2", headers=ASHA)
        assert response.json()["item_count"] == 4

    def test_unknown_product_is_bad_request(self, client):
        response = client.post("/cart", json={"product_id": 99, "quantity": 1}, headers=ASHA)
        assert response.status_code == 400
        assert "#99" in response.json()["message"]

    def test_zero_quantity_rejected_by_schema(self, client):
        response = client.post("/cart", json={"product_id": 1, "quantity": 0}, headers=ASHA)
        assert response.status_code == 422


class TestPlaceOrder:

    def test_created(self, client, storage, notifier):
        _fill_cart(client, ASHA, (1, 2), (2, 1))

        response = client.post("/orders", headers=ASHA)

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 1
        assert body["status"] == "Pending"
        assert body["total_amount"] == "55.00"
        assert [(i["product_id"], i["quantity"]) for i in body["items"]] == [(1, 2), (2, 1)]
        assert storage.products.get_by_code(ProductCode(2)).stock == 0
        assert client.get("/cart", headers=ASHA).json()["items"] == []
        assert len(notifier.sent) == 1

    def test_client_prices_are_ignored(self, client):
        _fill_cart(client, ASHA, (1, 1))
        response = client.post("/orders", json={"total_amount": "0.01"}, headers=ASHA)
        assert response.json()["total_amount"] == "15.00"

    def test_stock_conflict_names_the_lines(self, client, storage):
        _fill_cart(client, ASHA, (1, 2), (2, 3))

        response = client.post("/orders", headers=ASHA)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Out of stock: Gadget"
        assert body["unavailable"] == [2]
        gadget = next(i for i in body["items"] if i["product_id"] == 2)
        assert (gadget["requested"], gadget["available"], gadget["in_stock"]) == (3, 1, False)
        assert storage.products.get_by_code(ProductCode(1)).stock == 5

    def test_empty_cart(self, client):
        response = client.post("/orders", headers=ASHA)
        assert response.status_code == 400
        assert response.json()["message"] == "Your cart is empty"

    def test_unauthenticated(self, client):
        assert client.post("/orders").status_code == 401

    def test_storage_failure(self, client, storage):
        _fill_cart(client, ASHA, (1, 1))
        storage.orders.fail_writes = True

        response = client.post("/orders", headers=ASHA)

        assert response.status_code == 500
        assert response.json() == {"message": "Order was not placed"}
        assert storage.products.get_by_code(ProductCode(1)).stock == 5

    def test_notifier_failure_still_created(self, client, notifier):
        notifier.fail = True
        _fill_cart(client, ASHA, (1, 1))
        assert client.post("/orders", headers=ASHA).status_code == 201


class TestOrderQueries:

    def test_owner_and_others(self, client):
        _fill_cart(client, ASHA, (1, 1))
        order_id = client.post("/orders", headers=ASHA).json()["id"]

        assert client.get(f"/orders/{order_id}", headers=ASHA).status_code == 200
        assert client.get(f"/orders/{order_id}", headers=RAVI).status_code == 403
        assert client.get("/orders/999", headers=ASHA).status_code == 404
        assert [o["id"] for o in client.get("/orders", headers=ASHA).json()] == [order_id]

    def test_admin_advances_status(self, client):
        _fill_cart(client, ASHA, (1, 1))
        order_id = client.post("/orders", headers=ASHA).json()["id"]
        url = f"/admin/orders/{order_id}/status"

        assert client.put(url, json={"status": "Shipped"}, headers=ASHA).status_code == 403
        response = client.put(url, json={"status": "Shipped"}, headers=ADMIN)
        assert response.json()["status"] == "Shipped"
        assert client.put(url, json={"status": "Pending"}, headers=ADMIN).status_code == 400


class TestReviews:

    def test_rating_follows_reviews(self, client):
        first = client.post("/products/1/reviews", json={"rating": 4, "comment": "ok"}, headers=ASHA)
        assert first.status_code == 201
        client.post("/products/1/reviews", json={"rating": 2}, headers=RAVI)
        assert client.get("/products/1").json()["rating"] == "3.0"

        assert client.put(f"/reviews/{first.json()['id']}", json={"rating": 5}, headers=RAVI).status_code == 403
        client.delete(f"/reviews/{first.json()['id']}", headers=ASHA)

        product = client.get("/products/1").json()
        assert (product["rating"], product["review_count"]) == ("2.0", 1)
        assert len(client.get("/products/1/reviews").json()) == 1

    def test_rating_out_of_range(self, client):
        response = client.post("/products/1/reviews", json={"rating": 6}, headers=ASHA)
        assert response.status_code == 422

    def test_review_for_unknown_product(self, client):
        response = client.post("/products/99/reviews", json={"rating": 4}, headers=ASHA)
        assert response.status_code == 404
