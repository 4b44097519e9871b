"""Cart totals and stock validation.

Both are pure reads over the cart's current lines and the current product
records: nothing is persisted and no stock is reserved, so a cart that
validates here can still fail at checkout.
"""

from dataclasses import dataclass, field

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from store.cart.cart import Cart
from store.cart.coupons import discount_for
from store.product.product import Product

# Every shipping method is currently free at cart level; orders add a flat rate.
SHIPPING_RATES = {
    "standard": 0.0,
    "express": 0.0,
    "overnight": 0.0,
}


@dataclass(frozen=True)
class CartTotals:
    subtotal: float
    tax: float
    shipping: float
    discount: float
    total: float


@dataclass
class CartValidation:
    is_valid: bool = True
    issues: list[str] = field(default_factory=list)

    def flag(self, issue: str) -> None:
        self.is_valid = False
        self.issues.append(issue)


def load_products(cart: Cart) -> dict[str, Product | None]:
    """Map each line's product id to its current record, or None if it no longer exists."""
    repo = current_domain.repository_for(Product)
    products = {}
    for item in cart.items:
        key = str(item.product_id)
        if key in products:
            continue
        try:
            products[key] = repo.get(key)
        except ObjectNotFoundError:
            products[key] = None
    return products


def shipping_cost(shipping_method: str | None) -> float:
    return SHIPPING_RATES.get((shipping_method or "standard").lower(), 0.0)


def calculate_totals(cart: Cart, tax_rate: float, shipping_method: str | None = None) -> CartTotals:
    products = load_products(cart)

    subtotal = 0.0
    for item in cart.items:
        product = products[str(item.product_id)]
        if product is None:
            raise ObjectNotFoundError(f"Product not found with ID: {item.product_id}")
        subtotal += product.price * item.quantity

    tax = subtotal * (tax_rate or 0.0)
    shipping = shipping_cost(shipping_method)
    discount = discount_for(cart, subtotal)

    return CartTotals(
        subtotal=round(subtotal, 2),
        tax=round(tax, 2),
        shipping=round(shipping, 2),
        discount=round(discount, 2),
        total=round(subtotal + tax + shipping - discount, 2),
    )


def validate_cart(cart: Cart) -> CartValidation:
    products = load_products(cart)
    validation = CartValidation()

    for item in cart.items:
        product = products[str(item.product_id)]
        if product is None:
            validation.flag(f"Product {item.product_id} is out of stock")
            continue
        if not product.is_available:
            validation.flag(f"Product {product.name} is out of stock")
        if item.quantity > product.available_quantity:
            validation.flag(f"Insufficient stock for {product.name}")

    return validation
