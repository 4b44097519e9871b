"""Order placement: checkout, order-from-cart and direct order.

Each origin has its own command; one handler serves all three. Every
placement runs inside a single unit of work, so a validation failure
leaves neither an order nor a modified cart behind. Stock is checked but
not reserved.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from shared.config import order_flat_shipping, order_tax_rate
from shared.logging import get_logger
from store.cart.cart import Cart
from store.domain import store
from store.order.order import Order, OrderOrigin
from store.order.payment import process_payment
from store.product.product import Product

logger = get_logger(__name__)


@store.command(part_of="Order")
class Checkout:
    user_id = Identifier(required=True)
    shipping_address = Text()  # JSON: address dict
    billing_address = Text()  # JSON: address dict
    payment_method = String(max_length=50)
    payment_details = Text()  # JSON


@store.command(part_of="Order")
class PlaceOrderFromCart:
    user_id = Identifier(required=True)
    shipping_address = Text()
    billing_address = Text()
    payment_method = String(max_length=50)
    payment_details = Text()


@store.command(part_of="Order")
class PlaceDirectOrder:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    shipping_address = Text()
    billing_address = Text()
    payment_method = String(max_length=50)
    payment_details = Text()


def _loads(value):
    return json.loads(value) if isinstance(value, str) and value else value


def _orderable(product, quantity):
    if not product.is_available or product.available_quantity < quantity:
        raise ValidationError({"items": [f"Product {product.name} is out of stock or insufficient quantity"]})


def _line(product, quantity):
    return {
        "product_id": str(product.id),
        "product_name": product.name,
        "quantity": quantity,
        "price": product.price,
    }


@store.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(Checkout)
    def checkout(self, command):
        return self._from_cart(command, OrderOrigin.CHECKOUT)

    @handle(PlaceOrderFromCart)
    def place_order_from_cart(self, command):
        return self._from_cart(command, OrderOrigin.CART)

    @handle(PlaceDirectOrder)
    def place_direct_order(self, command):
        product = current_domain.repository_for(Product).get_active(command.product_id)
        _orderable(product, command.quantity)

        order = self._place(command, OrderOrigin.DIRECT, [_line(product, command.quantity)])
        return str(order.id)

    def _from_cart(self, command, origin):
        cart_repo = current_domain.repository_for(Cart)
        product_repo = current_domain.repository_for(Product)

        cart = cart_repo.for_user(command.user_id)
        if not cart.items:
            raise ValidationError({"cart": ["Cart is empty"]})

        lines = []
        for item in cart.items:
            product = product_repo.get_active(item.product_id)
            _orderable(product, item.quantity)
            lines.append(_line(product, item.quantity))

        order = self._place(command, origin, lines)

        cart.clear()
        cart_repo.add(cart)
        return str(order.id)

    def _place(self, command, origin, lines):
        order = Order.place(
            user_id=command.user_id,
            origin=origin,
            lines=lines,
            tax_rate=order_tax_rate(),
            flat_shipping=order_flat_shipping(),
            shipping_address=_loads(command.shipping_address),
            billing_address=_loads(command.billing_address),
            payment_method=command.payment_method,
        )
        process_payment(order, _loads(command.payment_details))
        current_domain.repository_for(Order).add(order)
        logger.info("Order placed", order_id=str(order.id), origin=origin.value, total=order.total)
        return order
