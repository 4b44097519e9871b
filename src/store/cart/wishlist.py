"""Moving lines between a user's cart and their wishlist."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from shared.logging import get_logger
from store.cart.cart import Cart
from store.domain import store
from store.product.product import Product
from store.wishlist.wishlist import Wishlist

logger = get_logger(__name__)


@store.command(part_of="Cart")
class MoveToWishlist:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@store.command(part_of="Cart")
class MoveFromWishlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@store.command_handler(part_of=Cart)
class WishlistTransferHandler:
    @handle(MoveToWishlist)
    def move_to_wishlist(self, command):
        cart_repo = current_domain.repository_for(Cart)
        wishlist_repo = current_domain.repository_for(Wishlist)

        cart = cart_repo.for_user(command.user_id)
        item = cart.find_item(command.item_id)
        if item is None:
            raise ObjectNotFoundError(f"Cart item not found with ID: {command.item_id}")

        wishlist = wishlist_repo.get_or_create(command.user_id)
        wishlist.add_product(item.product_id, item.quantity)
        cart.remove_item(command.item_id)

        wishlist_repo.add(wishlist)
        cart_repo.add(cart)
        logger.info("Cart item moved to wishlist", cart_id=str(cart.id), product_id=str(item.product_id))

    @handle(MoveFromWishlist)
    def move_from_wishlist(self, command):
        current_domain.repository_for(Product).get_active(command.product_id)

        cart_repo = current_domain.repository_for(Cart)
        wishlist_repo = current_domain.repository_for(Wishlist)

        cart = cart_repo.get_or_create(command.user_id)
        item = cart.add_item(command.product_id, command.quantity or 1)
        cart_repo.add(cart)

        wishlist = wishlist_repo.find_for_user(command.user_id)
        if wishlist is not None and wishlist.remove_product(command.product_id) is not None:
            wishlist_repo.add(wishlist)

        return str(item.id)
