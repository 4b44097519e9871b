"""Stock figures and product images."""

import json

from protean import handle
from protean.fields import DateTime, Identifier, Integer, Text
from protean.utils.globals import current_domain

from shared.logging import get_logger
from store.domain import store
from store.product.product import Product

logger = get_logger(__name__)


@store.command(part_of="Product")
class UpdateInventory:
    product_id: Identifier(required=True)
    quantity: Integer(min_value=0)
    reserved_quantity: Integer(min_value=0)
    low_stock_threshold: Integer(min_value=0)
    next_restock_date: DateTime()
    estimated_delivery_days: Integer(min_value=1)


@store.command(part_of="Product")
class AddProductImages:
    product_id: Identifier(required=True)
    urls: Text(required=True)  # JSON array of URLs


@store.command_handler(part_of=Product)
class ProductInventoryHandler:
    @handle(UpdateInventory)
    def update_inventory(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_active(command.product_id)
        product.update_inventory(
            quantity=command.quantity,
            reserved_quantity=command.reserved_quantity,
            low_stock_threshold=command.low_stock_threshold,
            next_restock_date=command.next_restock_date,
            estimated_delivery_days=command.estimated_delivery_days,
        )
        repo.add(product)
        logger.info("Inventory updated", product_id=str(product.id), quantity=product.quantity)
        return str(product.id)

    @handle(AddProductImages)
    def add_images(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_active(command.product_id)
        product.add_images(json.loads(command.urls))
        repo.add(product)
        return product.image_url_list


def availability(product: Product) -> dict:
    """Stock snapshot for a single product."""
    return {
        "product_id": str(product.id),
        "available": product.is_available,
        "quantity": product.quantity,
        "reserved_quantity": product.reserved_quantity,
        "available_quantity": product.available_quantity,
        "low_stock_threshold": product.low_stock_threshold,
        "is_low_stock": product.is_low_stock,
        "next_restock_date": product.next_restock_date,
        "estimated_delivery_days": product.estimated_delivery_days,
    }


def catalogue_analytics(products: list[Product]) -> dict:
    """Aggregate stock and price figures over a set of live products."""
    total = len(products)
    prices = [p.price for p in products if p.price is not None]
    return {
        "total_products": total,
        "active_products": sum(1 for p in products if p.active),
        "out_of_stock": sum(1 for p in products if (p.quantity or 0) == 0),
        "low_stock": sum(1 for p in products if p.is_low_stock),
        "average_price": round(sum(prices) / len(prices), 2) if prices else 0.0,
    }
