"""Order aggregate.

An order is a snapshot: each line copies the product's name and price at
the moment the order is placed, so later catalogue changes never alter
order history. Status is a free-form string; no transition rules are
enforced.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from store.domain import store
from store.order.events import OrderPlaced, OrderStatusChanged


class OrderOrigin(Enum):
    CHECKOUT = "CHECKOUT"
    CART = "CART"
    DIRECT = "DIRECT"


class OrderStatus(Enum):
    """Well-known statuses. Other values are accepted as-is."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


@store.value_object(part_of="Order")
class Address:
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@store.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)

    @property
    def line_total(self):
        return round(self.price * self.quantity, 2)


@store.aggregate
class Order:
    user_id = Identifier(required=True)
    origin = String(max_length=20, choices=OrderOrigin, default=OrderOrigin.CHECKOUT.value)
    status = String(max_length=50, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    subtotal = Float(default=0.0)
    tax = Float(default=0.0)
    shipping_cost = Float(default=0.0)
    total = Float(default=0.0)
    shipping_address = ValueObject(Address)
    billing_address = ValueObject(Address)
    payment_method = String(max_length=50)
    tracking_number = String(max_length=100)
    shipping_carrier = String(max_length=100)
    estimated_delivery = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        user_id,
        origin,
        lines,
        tax_rate,
        flat_shipping,
        shipping_address=None,
        billing_address=None,
        payment_method=None,
    ):
        """Create a PENDING order from `lines`: dicts of product_id, product_name, quantity, price."""
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=str(user_id),
            origin=origin.value if isinstance(origin, OrderOrigin) else origin,
            status=OrderStatus.PENDING.value,
            shipping_address=Address(**shipping_address) if shipping_address else None,
            billing_address=Address(**billing_address) if billing_address else None,
            payment_method=payment_method,
            created_at=now,
            updated_at=now,
        )
        for line in lines:
            order.add_items(
                OrderItem(
                    product_id=str(line["product_id"]),
                    product_name=line.get("product_name"),
                    quantity=line["quantity"],
                    price=line["price"],
                )
            )

        subtotal = sum(item.price * item.quantity for item in order.items)
        tax = subtotal * tax_rate
        order.subtotal = round(subtotal, 2)
        order.tax = round(tax, 2)
        order.shipping_cost = round(flat_shipping, 2)
        order.total = round(subtotal + tax + flat_shipping, 2)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                origin=order.origin,
                item_count=len(order.items),
                total=order.total,
                placed_at=now,
            )
        )
        return order

    @property
    def item_count(self):
        return len(self.items)

    def update_status(self, status, tracking_number=None, shipping_carrier=None, estimated_delivery=None):
        if not status or not status.strip():
            raise ValidationError({"status": ["Status is required"]})

        previous = self.status
        self.status = status.strip().upper()
        if tracking_number is not None:
            self.tracking_number = tracking_number
        if shipping_carrier is not None:
            self.shipping_carrier = shipping_carrier
        if estimated_delivery is not None:
            self.estimated_delivery = estimated_delivery
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=self.status,
                tracking_number=self.tracking_number,
                shipping_carrier=self.shipping_carrier,
            )
        )

    def tracking_updates(self):
        """Human-readable history synthesised from the order's timestamps."""
        updates = [f"Order created at {self.created_at.isoformat()}"]
        if self.status == OrderStatus.SHIPPED.value:
            updates.append(f"Order shipped at {self.updated_at.isoformat()}")
        return updates
