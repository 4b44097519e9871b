"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String

from store.domain import store


@store.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, or its line quantity was increased."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@store.event(part_of="Cart")
class CartItemQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@store.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)


@store.event(part_of="Cart")
class CartCleared:
    """Every line and the coupon were dropped from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    items_removed = Integer(required=True)


@store.event(part_of="Cart")
class CartCouponApplied:
    __version__ = 1

    cart_id = Identifier(required=True)
    coupon_code = String(required=True)


@store.event(part_of="Cart")
class CartCouponRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    coupon_code = String()
