"""Integration tests for Cart and Wishlist API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain
from shared.errors import register_error_handlers
from store.api.routes import cart_router, wishlist_router
from store.cart.cart import Cart
from store.product.management import CreateProduct

SHOPPER = {"Authorization": "Bearer shopper-token"}
OTHER = {"Authorization": "Bearer other-token"}


@pytest.fixture()
def client(authenticator):
    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(wishlist_router)
    register_error_handlers(app)
    return TestClient(app)


def _create_product(**overrides):
    defaults = {"name": "Product", "price": 10.0, "quantity": 10}
    defaults.update(overrides)
    return current_domain.process(CreateProduct(**defaults), asynchronous=False)


def _add(client, product_id, quantity=1, headers=SHOPPER):
    response = client.post("/cart/add", json={"product_id": product_id, "quantity": quantity}, headers=headers)
    assert response.status_code == 200
    return response.json()


class TestCartAccess:
    def test_cart_requires_a_token(self, client):
        assert client.get("/cart").status_code == 401

    def test_no_cart_yet_is_404(self, client):
        assert client.get("/cart", headers=SHOPPER).status_code == 404

    def test_cart_belongs_to_the_caller(self, client):
        _add(client, _create_product())
        assert client.get("/cart", headers=SHOPPER).json()["user_id"] == "user-001"
        assert client.get("/cart", headers=OTHER).status_code == 404


class TestCartItems:
    def test_add_returns_the_line_with_current_price(self, client):
        product_id = _create_product(price=12.5)
        item = _add(client, product_id, 2)
        assert item["product_id"] == product_id
        assert item["quantity"] == 2
        assert item["price"] == 12.5

    def test_adding_twice_merges(self, client):
        product_id = _create_product()
        first = _add(client, product_id, 1)
        second = _add(client, product_id, 2)
        assert second["id"] == first["id"]
        assert second["quantity"] == 3
        assert len(client.get("/cart", headers=SHOPPER).json()["items"]) == 1

    def test_add_unknown_product_is_404(self, client):
        response = client.post("/cart/add", json={"product_id": "missing", "quantity": 1}, headers=SHOPPER)
        assert response.status_code == 404

    def test_add_zero_quantity_is_422(self, client):
        response = client.post("/cart/add", json={"product_id": "p", "quantity": 0}, headers=SHOPPER)
        assert response.status_code == 422

    def test_update_quantity(self, client):
        item = _add(client, _create_product())
        response = client.put(f"/cart/items/{item['id']}", json={"quantity": 4}, headers=SHOPPER)
        assert response.status_code == 200
        assert response.json()["quantity"] == 4

    def test_update_to_zero_removes(self, client):
        item = _add(client, _create_product())
        response = client.put(f"/cart/items/{item['id']}", json={"quantity": 0}, headers=SHOPPER)
        assert response.status_code == 204
        assert client.get("/cart", headers=SHOPPER).json()["items"] == []

    def test_update_unknown_item_is_404(self, client):
        _add(client, _create_product())
        response = client.put("/cart/items/missing", json={"quantity": 2}, headers=SHOPPER)
        assert response.status_code == 404

    def test_remove_and_clear(self, client):
        first = _add(client, _create_product(name="A"))
        _add(client, _create_product(name="B"))

        assert client.delete(f"/cart/items/{first['id']}", headers=SHOPPER).status_code == 204
        assert len(client.get("/cart", headers=SHOPPER).json()["items"]) == 1

        assert client.delete("/cart/clear", headers=SHOPPER).status_code == 204
        assert client.get("/cart", headers=SHOPPER).json()["items"] == []


class TestCartBulk:
    def test_bulk_add_update_remove(self, client):
        a = _create_product(name="A")
        b = _create_product(name="B")
        response = client.post(
            "/cart/bulk-add",
            json=[{"product_id": a, "quantity": 1}, {"product_id": b, "quantity": 2}],
            headers=SHOPPER,
        )
        assert response.status_code == 200
        items = {i["product_id"]: i for i in response.json()}
        assert items[a]["quantity"] == 1
        assert items[b]["quantity"] == 2

        response = client.put(
            "/cart/bulk-update",
            json=[{"item_id": items[a]["id"], "quantity": 6}],
            headers=SHOPPER,
        )
        assert response.status_code == 200
        assert [i["quantity"] for i in response.json()] == [6]

        response = client.request("DELETE", "/cart/bulk-remove", json={"item_ids": [items[b]["id"]]}, headers=SHOPPER)
        assert response.status_code == 204
        remaining = client.get("/cart", headers=SHOPPER).json()["items"]
        assert [i["product_id"] for i in remaining] == [a]


class TestCartTotalsAndValidation:
    def test_calculate(self, client):
        _add(client, _create_product(price=20.0), 3)
        response = client.post(
            "/cart/calculate",
            json={"tax_rate": 0.05, "shipping_method": "express"},
            headers=SHOPPER,
        )
        assert response.status_code == 200
        assert response.json() == {"subtotal": 60.0, "tax": 3.0, "shipping": 0.0, "discount": 0.0, "total": 63.0}

    def test_validate(self, client):
        _add(client, _create_product(name="Scarce", quantity=1), 1)
        _add(client, _create_product(name="Plenty", quantity=9), 1)
        assert client.post("/cart/validate", headers=SHOPPER).json() == {"is_valid": True, "issues": []}

    def test_validate_reports_shortage(self, client):
        product_id = _create_product(name="Scarce", quantity=1)
        _add(client, product_id, 1)
        _add(client, product_id, 1)
        response = client.post("/cart/validate", headers=SHOPPER)
        assert response.json() == {"is_valid": False, "issues": ["Insufficient stock for Scarce"]}


class TestCoupons:
    def test_apply_and_remove(self, client):
        _add(client, _create_product())
        response = client.post("/cart/coupon", json={"coupon_code": "SAVE10"}, headers=SHOPPER)
        assert response.status_code == 200
        assert response.json()["coupon_code"] == "SAVE10"

        response = client.delete("/cart/coupon", headers=SHOPPER)
        assert response.json()["coupon_code"] is None

    def test_blank_coupon_is_400(self, client):
        _add(client, _create_product())
        response = client.post("/cart/coupon", json={"coupon_code": "   "}, headers=SHOPPER)
        assert response.status_code == 400


class TestSharingAndAnalytics:
    def test_share_and_view(self, client):
        product_id = _create_product()
        _add(client, product_id, 2)
        response = client.post("/cart/share", json={"shared_with": "friend@example.com"}, headers=SHOPPER)
        assert response.status_code == 200
        share = response.json()
        assert share["share_link"].endswith(share["share_id"])

        # Shared carts are readable without a token
        response = client.get(f"/cart/shared/{share['share_id']}")
        assert response.status_code == 200
        assert response.json()["owner_id"] == "user-001"
        assert response.json()["items"][0]["quantity"] == 2

    def test_unknown_share_is_404(self, client):
        assert client.get("/cart/shared/nope").status_code == 404

    def test_abandonment(self, client):
        _add(client, _create_product(name="A"))
        _add(client, _create_product(name="B"))
        response = client.get("/cart/analytics/abandonment", headers=SHOPPER)
        assert response.status_code == 200
        assert response.json()["item_count"] == 2
        assert response.json()["last_modified"] is not None


class TestWishlist:
    def test_empty_wishlist(self, client):
        response = client.get("/wishlist", headers=SHOPPER)
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_round_trip_through_wishlist(self, client):
        product_id = _create_product()
        item = _add(client, product_id, 2)

        response = client.post(f"/cart/items/{item['id']}/move-to-wishlist", headers=SHOPPER)
        assert response.status_code == 200
        assert client.get("/cart", headers=SHOPPER).json()["items"] == []
        wishlist = client.get("/wishlist", headers=SHOPPER).json()
        assert [(i["product_id"], i["quantity"]) for i in wishlist["items"]] == [(product_id, 2)]

        response = client.post(f"/cart/move-from-wishlist/{product_id}", params={"quantity": 2}, headers=SHOPPER)
        assert response.status_code == 200
        assert response.json()["quantity"] == 2
        assert client.get("/wishlist", headers=SHOPPER).json()["items"] == []
        assert current_domain.repository_for(Cart).for_user("user-001").item_count == 1
