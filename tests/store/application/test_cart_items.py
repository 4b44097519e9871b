"""Application tests for cart item management commands."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from store.cart.cart import Cart
from store.cart.items import (
    AddToCart,
    BulkAddToCart,
    BulkRemoveCartItems,
    BulkUpdateCartItems,
    ClearCart,
    RemoveCartItem,
    UpdateCartItem,
)
from store.product.management import CreateProduct, DeleteProduct

USER_ID = "user-001"


def _create_product(**overrides):
    defaults = {"name": "Product", "price": 10.0, "quantity": 10}
    defaults.update(overrides)
    return current_domain.process(CreateProduct(**defaults), asynchronous=False)


def _add(product_id, quantity=1, user_id=USER_ID):
    return current_domain.process(
        AddToCart(user_id=user_id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )


def _cart(user_id=USER_ID):
    return current_domain.repository_for(Cart).for_user(user_id)


class TestAddToCart:
    def test_first_add_creates_the_cart(self):
        product_id = _create_product()
        item_id = _add(product_id, 2)
        cart = _cart()
        assert cart.item_count == 1
        assert str(cart.items[0].id) == item_id
        assert cart.items[0].quantity == 2

    def test_repeated_add_merges_lines(self):
        product_id = _create_product()
        _add(product_id, 2)
        _add(product_id, 3)
        cart = _cart()
        assert cart.item_count == 1
        assert cart.items[0].quantity == 5

    def test_each_user_has_their_own_cart(self):
        product_id = _create_product()
        _add(product_id, user_id="user-001")
        _add(product_id, user_id="user-002")
        assert _cart("user-001").id != _cart("user-002").id

    def test_unknown_product_is_rejected(self):
        with pytest.raises(ObjectNotFoundError):
            _add("missing")

    def test_deleted_product_is_rejected(self):
        product_id = _create_product()
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            _add(product_id)


class TestUpdateAndRemove:
    def test_update_quantity(self):
        item_id = _add(_create_product())
        result = current_domain.process(
            UpdateCartItem(user_id=USER_ID, item_id=item_id, quantity=7),
            asynchronous=False,
        )
        assert result == item_id
        assert _cart().items[0].quantity == 7

    def test_update_to_zero_removes_line(self):
        item_id = _add(_create_product())
        result = current_domain.process(
            UpdateCartItem(user_id=USER_ID, item_id=item_id, quantity=0),
            asynchronous=False,
        )
        assert result is None
        assert _cart().item_count == 0

    def test_update_without_cart_is_not_found(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                UpdateCartItem(user_id="nobody", item_id="item", quantity=1),
                asynchronous=False,
            )

    def test_remove_item(self):
        item_id = _add(_create_product())
        current_domain.process(RemoveCartItem(user_id=USER_ID, item_id=item_id), asynchronous=False)
        assert _cart().item_count == 0

    def test_clear_cart(self):
        _add(_create_product(name="A"))
        _add(_create_product(name="B"))
        current_domain.process(ClearCart(user_id=USER_ID), asynchronous=False)
        assert _cart().item_count == 0


class TestBulkOperations:
    def test_bulk_add(self):
        first = _create_product(name="A")
        second = _create_product(name="B")
        item_ids = current_domain.process(
            BulkAddToCart(
                user_id=USER_ID,
                items=json.dumps(
                    [
                        {"product_id": first, "quantity": 1},
                        {"product_id": second, "quantity": 2},
                        {"product_id": first, "quantity": 3},
                    ]
                ),
            ),
            asynchronous=False,
        )
        cart = _cart()
        assert cart.item_count == 2
        assert len(item_ids) == 3
        assert item_ids[0] == item_ids[2]
        assert cart.item_for_product(first).quantity == 4

    def test_bulk_add_with_unknown_product_adds_nothing(self):
        known = _create_product()
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                BulkAddToCart(
                    user_id=USER_ID,
                    items=json.dumps([{"product_id": known, "quantity": 1}, {"product_id": "missing", "quantity": 1}]),
                ),
                asynchronous=False,
            )
        assert current_domain.repository_for(Cart).find_for_user(USER_ID) is None

    def test_bulk_update(self):
        first = _add(_create_product(name="A"))
        second = _add(_create_product(name="B"))
        updated = current_domain.process(
            BulkUpdateCartItems(
                user_id=USER_ID,
                items=json.dumps([{"item_id": first, "quantity": 5}, {"item_id": second, "quantity": 0}]),
            ),
            asynchronous=False,
        )
        cart = _cart()
        assert updated == [first]
        assert cart.item_count == 1
        assert cart.items[0].quantity == 5

    def test_bulk_remove(self):
        first = _add(_create_product(name="A"))
        second = _add(_create_product(name="B"))
        _add(_create_product(name="C"))
        current_domain.process(
            BulkRemoveCartItems(user_id=USER_ID, item_ids=json.dumps([first, second, "unknown"])),
            asynchronous=False,
        )
        assert _cart().item_count == 1
