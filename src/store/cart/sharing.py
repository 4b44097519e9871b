"""Cart sharing.

A share records who the cart was shared with and hands out a link. The
shared view is always built from the owner's current cart, so it reflects
changes made after the share was created.
"""

import uuid
from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from shared.config import share_base_url
from shared.logging import get_logger
from store.cart.cart import Cart
from store.domain import store

logger = get_logger(__name__)


@store.aggregate
class CartShare:
    share_id = String(required=True, unique=True, max_length=36)
    cart_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    shared_with = String(max_length=255)
    created_at = DateTime()

    @property
    def share_link(self):
        return f"{share_base_url()}{self.share_id}"


@store.command(part_of="CartShare")
class ShareCart:
    user_id = Identifier(required=True)
    shared_with = String(max_length=255)


@store.command_handler(part_of=CartShare)
class ShareCartHandler:
    @handle(ShareCart)
    def share_cart(self, command):
        cart = current_domain.repository_for(Cart).for_user(command.user_id)

        share = CartShare(
            share_id=str(uuid.uuid4()),
            cart_id=str(cart.id),
            owner_id=str(command.user_id),
            shared_with=command.shared_with,
            created_at=datetime.now(UTC),
        )
        current_domain.repository_for(CartShare).add(share)
        logger.info("Cart shared", cart_id=str(cart.id), share_id=share.share_id)
        return share.share_id


def find_share(share_id) -> CartShare:
    matches = current_domain.repository_for(CartShare)._dao.query.filter(share_id=share_id).all().items
    if not matches:
        raise ObjectNotFoundError(f"Shared cart not found: {share_id}")
    return matches[0]


def shared_cart(share_id) -> tuple[CartShare, Cart]:
    """Resolve a share id to the share record and the owner's current cart."""
    share = find_share(share_id)
    cart = current_domain.repository_for(Cart).get(share.cart_id)
    return share, cart
