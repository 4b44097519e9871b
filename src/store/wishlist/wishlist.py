"""Wishlist aggregate: products a user has set aside, one wishlist per user."""

from datetime import UTC, datetime

from protean.fields import DateTime, HasMany, Identifier, Integer

from store.domain import store


@store.entity(part_of="Wishlist")
class WishlistItem:
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)
    added_at = DateTime()


@store.aggregate
class Wishlist:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(WishlistItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=str(user_id), created_at=now, updated_at=now)

    def item_for_product(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def add_product(self, product_id, quantity=1):
        now = datetime.now(UTC)
        item = self.item_for_product(product_id)
        if item:
            item.quantity += quantity
        else:
            item = WishlistItem(product_id=str(product_id), quantity=quantity, added_at=now)
            self.add_items(item)
        self.updated_at = now
        return item

    def remove_product(self, product_id):
        item = self.item_for_product(product_id)
        if item is not None:
            self.remove_items(item)
            self.updated_at = datetime.now(UTC)
        return item
