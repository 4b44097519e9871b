from protean.exceptions import ObjectNotFoundError

from store.domain import store
from store.wishlist.wishlist import Wishlist


@store.repository(part_of=Wishlist)
class WishlistRepository:
    def find_for_user(self, user_id) -> Wishlist | None:
        matches = self._dao.query.filter(user_id=str(user_id)).all().items
        return self.get(matches[0].id) if matches else None

    def for_user(self, user_id) -> Wishlist:
        wishlist = self.find_for_user(user_id)
        if wishlist is None:
            raise ObjectNotFoundError(f"Wishlist not found for user {user_id}")
        return wishlist

    def get_or_create(self, user_id) -> Wishlist:
        wishlist = self.find_for_user(user_id)
        return wishlist if wishlist is not None else Wishlist.create(user_id)
