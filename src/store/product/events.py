"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from store.domain import store


@store.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    sku = String(required=True)
    name = String(required=True)
    price = Float(required=True)
    category_id = Identifier()
    created_at = DateTime(required=True)


@store.event(part_of="Product")
class ProductDetailsUpdated:
    """One or more catalogue attributes of a product were changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    changed_fields = Text()  # JSON array of field names


@store.event(part_of="Product")
class ProductInventoryUpdated:
    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer()
    reserved_quantity = Integer()
    low_stock_threshold = Integer()


@store.event(part_of="Product")
class ProductImagesAdded:
    __version__ = 1

    product_id = Identifier(required=True)
    urls = Text(required=True)  # JSON array


@store.event(part_of="Product")
class ProductDeleted:
    """A product was soft-deleted and hidden from every read path."""

    __version__ = 1

    product_id = Identifier(required=True)
    deleted_at = DateTime(required=True)
