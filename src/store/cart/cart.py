"""Cart aggregate.

A user owns at most one cart; `user_id` is a unique field so a second cart
for the same user is rejected by the repository. Lines are keyed by
product: adding a product that is already in the cart increases the
existing line's quantity.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from store.cart.events import (
    CartCleared,
    CartCouponApplied,
    CartCouponRemoved,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
)
from store.domain import store


@store.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@store.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    coupon_code = String(max_length=100)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=str(user_id), created_at=now, updated_at=now)

    def find_item(self, item_id):
        return next((i for i in self.items if str(i.id) == str(item_id)), None)

    def item_for_product(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    @property
    def item_count(self):
        return len(self.items)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity):
        """Add a product, merging into the existing line for that product. Returns the line."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now(UTC)
        item = self.item_for_product(product_id)
        if item:
            item.quantity += quantity
        else:
            item = CartItem(product_id=str(product_id), quantity=quantity, added_at=now)
            self.add_items(item)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity=quantity,
            )
        )
        return item

    def update_item_quantity(self, item_id, new_quantity):
        """Set a line's quantity. A quantity of zero removes the line and returns None."""
        if new_quantity is None or new_quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})

        item = self.find_item(item_id)
        if item is None:
            raise ObjectNotFoundError(f"Cart item not found with ID: {item_id}")

        if new_quantity == 0:
            self.remove_item(item_id)
            return None

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )
        return item

    def remove_item(self, item_id):
        """Remove a line; unknown item ids are ignored."""
        item = self.find_item(item_id)
        if item is None:
            return None

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item_id),
                product_id=str(item.product_id),
            )
        )
        return item

    def clear(self):
        removed = list(self.items)
        for item in removed:
            self.remove_items(item)
        self.coupon_code = None
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), items_removed=len(removed)))

    # -------------------------------------------------------------------
    # Coupons
    # -------------------------------------------------------------------
    def apply_coupon(self, coupon_code):
        self.coupon_code = coupon_code
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCouponApplied(cart_id=str(self.id), coupon_code=coupon_code))

    def remove_coupon(self):
        previous = self.coupon_code
        self.coupon_code = None
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCouponRemoved(cart_id=str(self.id), coupon_code=previous))
