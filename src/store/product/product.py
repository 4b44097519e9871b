"""Product aggregate root.

Products are never removed from storage: deleting a product flips the
`deleted` flag, and every read path filters on `deleted=False`. Stock is
tracked as a plain counter plus a reserved counter; nothing here reserves
stock atomically with order creation.
"""

import json
import re
import time
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from store.domain import store
from store.product.events import (
    ProductCreated,
    ProductDeleted,
    ProductDetailsUpdated,
    ProductImagesAdded,
    ProductInventoryUpdated,
)


def generate_sku(name):
    """Three upper-case alphanumerics from the name plus the last six digits of the epoch millis."""
    prefix = re.sub(r"[^a-zA-Z0-9]", "", name).upper()[:3] or "PRD"
    millis = str(int(time.time() * 1000))
    return f"{prefix}-{millis[-6:]}"


def _dump_json(value):
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value)


@store.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = String(max_length=2000)
    price = Float(required=True, min_value=0.01)
    sku = String(max_length=50)
    category_id = Identifier()
    subcategory_id = Identifier()
    brand = String(max_length=100)
    quantity = Integer(default=0, min_value=0)
    reserved_quantity = Integer(default=0, min_value=0)
    low_stock_threshold = Integer(default=0, min_value=0)
    weight = Float(min_value=0.0)
    dimensions = String(max_length=100)
    custom_attributes = Text()  # JSON object
    tags = Text()  # JSON array of strings
    image_urls = Text()  # JSON array of URLs
    rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    next_restock_date = DateTime()
    estimated_delivery_days = Integer(min_value=1)
    active = Boolean(default=True)
    deleted = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def custom_attributes_must_be_a_json_object(self):
        if not self.custom_attributes:
            return
        try:
            attributes = json.loads(self.custom_attributes)
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"custom_attributes": ["Custom attributes must be valid JSON"]}) from None
        if not isinstance(attributes, dict):
            raise ValidationError({"custom_attributes": ["Custom attributes must be a JSON object"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        name,
        price,
        category_id=None,
        subcategory_id=None,
        description=None,
        brand=None,
        quantity=None,
        low_stock_threshold=None,
        weight=None,
        dimensions=None,
        custom_attributes=None,
        tags=None,
    ):
        if not name or not name.strip():
            raise ValidationError({"name": ["Product name is required"]})

        now = datetime.now(UTC)
        product = cls(
            name=name,
            price=price,
            sku=generate_sku(name),
            category_id=category_id,
            subcategory_id=subcategory_id,
            description=description,
            brand=brand,
            quantity=quantity or 0,
            low_stock_threshold=low_stock_threshold or 0,
            weight=weight,
            dimensions=dimensions,
            custom_attributes=_dump_json(custom_attributes),
            tags=_dump_json(tags),
            image_urls=json.dumps([]),
            active=True,
            deleted=False,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                sku=product.sku,
                name=name,
                price=price,
                category_id=str(category_id) if category_id else None,
                created_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------
    @property
    def available_quantity(self):
        return max((self.quantity or 0) - (self.reserved_quantity or 0), 0)

    @property
    def is_available(self):
        return bool(self.active) and not self.deleted and (self.quantity or 0) > 0

    @property
    def is_low_stock(self):
        return (self.quantity or 0) <= (self.low_stock_threshold or 0)

    @property
    def image_url_list(self):
        return json.loads(self.image_urls) if self.image_urls else []

    @property
    def tag_list(self):
        return json.loads(self.tags) if self.tags else []

    @property
    def attribute_map(self):
        return json.loads(self.custom_attributes) if self.custom_attributes else {}

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def revise(
        self,
        name=None,
        description=None,
        price=None,
        category_id=None,
        subcategory_id=None,
        brand=None,
        quantity=None,
        low_stock_threshold=None,
        weight=None,
        dimensions=None,
        custom_attributes=None,
        tags=None,
        rating=None,
        active=None,
    ):
        """Apply every provided attribute; `None` means "leave unchanged"."""
        changed = []

        if name is not None:
            self.name = name
            changed.append("name")
        if description is not None:
            self.description = description
            changed.append("description")
        if price is not None:
            self.price = price
            changed.append("price")
        if category_id is not None:
            self.category_id = category_id
            changed.append("category_id")
        if subcategory_id is not None:
            self.subcategory_id = subcategory_id
            changed.append("subcategory_id")
        if brand is not None:
            self.brand = brand
            changed.append("brand")
        if quantity is not None:
            self.quantity = quantity
            changed.append("quantity")
        if low_stock_threshold is not None:
            self.low_stock_threshold = low_stock_threshold
            changed.append("low_stock_threshold")
        if weight is not None:
            self.weight = weight
            changed.append("weight")
        if dimensions is not None:
            self.dimensions = dimensions
            changed.append("dimensions")
        if custom_attributes is not None:
            self.custom_attributes = _dump_json(custom_attributes)
            changed.append("custom_attributes")
        if tags is not None:
            self.tags = _dump_json(tags)
            changed.append("tags")
        if rating is not None:
            self.rating = rating
            changed.append("rating")
        if active is not None:
            self.active = active
            changed.append("active")

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                changed_fields=json.dumps(changed),
            )
        )
        return changed

    def update_inventory(
        self,
        quantity=None,
        reserved_quantity=None,
        low_stock_threshold=None,
        next_restock_date=None,
        estimated_delivery_days=None,
    ):
        if quantity is not None:
            self.quantity = quantity
        if reserved_quantity is not None:
            self.reserved_quantity = reserved_quantity
        if low_stock_threshold is not None:
            self.low_stock_threshold = low_stock_threshold
        if next_restock_date is not None:
            self.next_restock_date = next_restock_date
        if estimated_delivery_days is not None:
            self.estimated_delivery_days = estimated_delivery_days

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductInventoryUpdated(
                product_id=str(self.id),
                quantity=self.quantity,
                reserved_quantity=self.reserved_quantity,
                low_stock_threshold=self.low_stock_threshold,
            )
        )

    def add_images(self, urls):
        if not urls:
            raise ValidationError({"urls": ["At least one image URL is required"]})

        images = self.image_url_list
        images.extend(urls)
        self.image_urls = json.dumps(images)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductImagesAdded(
                product_id=str(self.id),
                urls=json.dumps(list(urls)),
            )
        )
        return list(urls)

    def soft_delete(self):
        if self.deleted:
            raise ValidationError({"product": ["Product is already deleted"]})

        now = datetime.now(UTC)
        self.deleted = True
        self.active = False
        self.updated_at = now

        self.raise_(
            ProductDeleted(
                product_id=str(self.id),
                deleted_at=now,
            )
        )
