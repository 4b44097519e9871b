"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from store.domain import store


@store.event(part_of="Order")
class OrderPlaced:
    """A new order was created with status PENDING."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    origin = String(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    placed_at = DateTime(required=True)


@store.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String()
    new_status = String(required=True)
    tracking_number = String()
    shipping_carrier = String()
