"""Custom repository for the Order aggregate: reads scoped to the owning user."""

from protean.exceptions import ObjectNotFoundError

from store.domain import store
from store.order.order import Order
from store.pagination import Page, PageRequest

SORTABLE_FIELDS = frozenset({"id", "created_at", "updated_at", "total", "status"})


@store.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id, request: PageRequest, status=None) -> Page:
        request = request.checked(SORTABLE_FIELDS)
        lookups = {"user_id": str(user_id)}
        if status:
            lookups["status"] = status.upper()

        result = (
            self._dao.query.filter(**lookups)
            .order_by(request.order_by)
            .offset(request.offset)
            .limit(request.size)
            .all()
        )
        # Rehydrate through `get` so each summary carries its order lines
        orders = [self.get(order.id) for order in result.items]
        return Page(items=orders, total=result.total, page=request.page, size=request.size)

    def get_for_user(self, order_id, user_id) -> Order:
        """Fetch an order only if it belongs to `user_id`."""
        order = self.get(order_id)
        if str(order.user_id) != str(user_id):
            raise ObjectNotFoundError(f"Order not found with ID: {order_id}")
        return order
