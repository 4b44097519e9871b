"""Cart coupon management: commands and handler.

Coupon validation is a stub: any non-blank code is accepted and no
discount is computed from it yet.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shared.logging import get_logger
from store.cart.cart import Cart
from store.domain import store

logger = get_logger(__name__)


def is_valid_coupon(coupon_code):
    return bool(coupon_code and coupon_code.strip())


def discount_for(cart, subtotal):
    """Discount granted by the cart's coupon. No coupon carries a value yet."""
    return 0.0


@store.command(part_of="Cart")
class ApplyCoupon:
    user_id = Identifier(required=True)
    coupon_code = String(required=True, max_length=100)


@store.command(part_of="Cart")
class RemoveCoupon:
    user_id = Identifier(required=True)


@store.command_handler(part_of=Cart)
class CartCouponHandler:
    @handle(ApplyCoupon)
    def apply_coupon(self, command):
        if not is_valid_coupon(command.coupon_code):
            raise ValidationError({"coupon_code": ["Invalid coupon code"]})

        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        cart.apply_coupon(command.coupon_code.strip())
        repo.add(cart)
        logger.info("Coupon applied", cart_id=str(cart.id), coupon_code=cart.coupon_code)
        return str(cart.id)

    @handle(RemoveCoupon)
    def remove_coupon(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        cart.remove_coupon()
        repo.add(cart)
        return str(cart.id)
