"""Product catalogue management: create, full update, partial update, soft delete."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from shared.logging import get_logger
from store.domain import store
from store.product.product import Product

logger = get_logger(__name__)


@store.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.01)
    description: String(max_length=2000)
    category_id: Identifier()
    subcategory_id: Identifier()
    brand: String(max_length=100)
    quantity: Integer(min_value=0)
    low_stock_threshold: Integer(min_value=0)
    weight: Float(min_value=0.0)
    dimensions: String(max_length=100)
    custom_attributes: Text()  # JSON object
    tags: Text()  # JSON array


@store.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: String(max_length=2000)
    price: Float(min_value=0.01)
    category_id: Identifier()
    subcategory_id: Identifier()
    brand: String(max_length=100)
    quantity: Integer(min_value=0)
    low_stock_threshold: Integer(min_value=0)
    weight: Float(min_value=0.0)
    dimensions: String(max_length=100)
    custom_attributes: Text()
    tags: Text()
    active: Boolean()


@store.command(part_of="Product")
class PatchProduct:
    """Partial update: one optional slot per updatable attribute."""

    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: String(max_length=2000)
    price: Float(min_value=0.01)
    category_id: Identifier()
    subcategory_id: Identifier()
    brand: String(max_length=100)
    quantity: Integer(min_value=0)
    low_stock_threshold: Integer(min_value=0)
    weight: Float(min_value=0.0)
    dimensions: String(max_length=100)
    custom_attributes: Text()
    tags: Text()
    rating: Float(min_value=0.0, max_value=5.0)
    active: Boolean()


@store.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


_REVISABLE = (
    "name",
    "description",
    "price",
    "category_id",
    "subcategory_id",
    "brand",
    "quantity",
    "low_stock_threshold",
    "weight",
    "dimensions",
    "custom_attributes",
    "tags",
    "rating",
    "active",
)


def _revisions(command):
    return {name: getattr(command, name, None) for name in _REVISABLE if getattr(command, name, None) is not None}


@store.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            description=command.description,
            category_id=command.category_id,
            subcategory_id=command.subcategory_id,
            brand=command.brand,
            quantity=command.quantity,
            low_stock_threshold=command.low_stock_threshold,
            weight=command.weight,
            dimensions=command.dimensions,
            custom_attributes=command.custom_attributes,
            tags=command.tags,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), sku=product.sku)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        return self._revise(command)

    @handle(PatchProduct)
    def patch_product(self, command):
        return self._revise(command)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_active(command.product_id)
        product.soft_delete()
        repo.add(product)
        logger.info("Product deleted", product_id=str(product.id))

    def _revise(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_active(command.product_id)
        changed = product.revise(**_revisions(command))
        repo.add(product)
        logger.info("Product updated", product_id=str(product.id), changed_fields=changed)
        return str(product.id)
