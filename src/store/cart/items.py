"""Cart item management: commands and handler.

Every command names the owning user rather than a cart id; the first
item added for a user creates their cart.
"""

import json

from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from shared.logging import get_logger
from store.cart.cart import Cart
from store.domain import store
from store.product.product import Product

logger = get_logger(__name__)


@store.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@store.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)


@store.command(part_of="Cart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@store.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@store.command(part_of="Cart")
class BulkAddToCart:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity}


@store.command(part_of="Cart")
class BulkUpdateCartItems:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {item_id, quantity}


@store.command(part_of="Cart")
class BulkRemoveCartItems:
    user_id = Identifier(required=True)
    item_ids = Text(required=True)  # JSON: list of item ids


def _add(cart, product_id, quantity):
    # Raises ObjectNotFoundError for unknown or soft-deleted products
    current_domain.repository_for(Product).get_active(product_id)
    return cart.add_item(product_id=product_id, quantity=quantity)


@store.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.user_id)
        item = _add(cart, command.product_id, command.quantity)
        repo.add(cart)
        logger.info("Item added to cart", cart_id=str(cart.id), product_id=str(command.product_id))
        return str(item.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        item = cart.update_item_quantity(command.item_id, command.quantity)
        repo.add(cart)
        return str(item.id) if item else None

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        cart.remove_item(command.item_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        cart.clear()
        repo.add(cart)
        logger.info("Cart cleared", cart_id=str(cart.id))

    @handle(BulkAddToCart)
    def bulk_add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.user_id)
        item_ids = []
        for entry in json.loads(command.items):
            item = _add(cart, entry["product_id"], entry["quantity"])
            item_ids.append(str(item.id))
        repo.add(cart)
        return item_ids

    @handle(BulkUpdateCartItems)
    def bulk_update_cart_items(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        item_ids = []
        for entry in json.loads(command.items):
            item = cart.update_item_quantity(entry["item_id"], entry["quantity"])
            if item:
                item_ids.append(str(item.id))
        repo.add(cart)
        return item_ids

    @handle(BulkRemoveCartItems)
    def bulk_remove_cart_items(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        for item_id in json.loads(command.item_ids):
            cart.remove_item(item_id)
        repo.add(cart)
