"""Custom repository for the Cart aggregate: lookups by owning user."""

from protean.exceptions import ObjectNotFoundError

from store.cart.cart import Cart
from store.domain import store


@store.repository(part_of=Cart)
class CartRepository:
    def find_for_user(self, user_id) -> Cart | None:
        matches = self._dao.query.filter(user_id=str(user_id)).all().items
        return self.get(matches[0].id) if matches else None

    def for_user(self, user_id) -> Cart:
        cart = self.find_for_user(user_id)
        if cart is None:
            raise ObjectNotFoundError(f"Cart not found for user {user_id}")
        return cart

    def get_or_create(self, user_id) -> Cart:
        cart = self.find_for_user(user_id)
        return cart if cart is not None else Cart.create(user_id)
