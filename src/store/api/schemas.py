"""Pydantic request/response schemas for the Store API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    street: str
    city: str
    state: str | None = None
    postal_code: str
    country: str


class StatusResponse(BaseModel):
    status: str = "ok"


class PageResponse(BaseModel):
    page: int
    size: int
    total: int
    total_pages: int


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    price: float = Field(gt=0)
    description: str | None = Field(default=None, max_length=2000)
    category_id: str | None = None
    subcategory_id: str | None = None
    brand: str | None = None
    quantity: int = Field(ge=0, default=0)
    low_stock_threshold: int = Field(ge=0, default=0)
    weight: float | None = Field(default=None, ge=0)
    dimensions: str | None = None
    custom_attributes: dict[str, Any] | None = None
    tags: list[str] | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Wireless Headphones",
                    "price": 79.99,
                    "description": "Over-ear, noise cancelling",
                    "brand": "Acme",
                    "quantity": 25,
                    "tags": ["audio", "wireless"],
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    price: float | None = Field(default=None, gt=0)
    description: str | None = Field(default=None, max_length=2000)
    category_id: str | None = None
    subcategory_id: str | None = None
    brand: str | None = None
    quantity: int | None = Field(default=None, ge=0)
    low_stock_threshold: int | None = Field(default=None, ge=0)
    weight: float | None = Field(default=None, ge=0)
    dimensions: str | None = None
    custom_attributes: dict[str, Any] | None = None
    tags: list[str] | None = None
    active: bool | None = None


class PatchProductRequest(UpdateProductRequest):
    """Partial update. Unrecognised keys are accepted and reported back as ignored."""

    model_config = ConfigDict(extra="allow")

    rating: float | None = Field(default=None, ge=0, le=5)

    def ignored_fields(self) -> list[str]:
        return sorted((self.model_extra or {}).keys())


class InventoryUpdateRequest(BaseModel):
    quantity: int | None = Field(default=None, ge=0)
    reserved_quantity: int | None = Field(default=None, ge=0)
    low_stock_threshold: int | None = Field(default=None, ge=0)
    next_restock_date: datetime | None = None
    estimated_delivery_days: int | None = Field(default=None, ge=1)


class AddImagesRequest(BaseModel):
    urls: list[str] = Field(min_length=1)


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    sku: str | None = None
    category_id: str | None = None
    subcategory_id: str | None = None
    brand: str | None = None
    quantity: int
    reserved_quantity: int
    available_quantity: int
    low_stock_threshold: int
    is_low_stock: bool
    weight: float | None = None
    dimensions: str | None = None
    custom_attributes: dict[str, Any] = {}
    tags: list[str] = []
    image_urls: list[str] = []
    rating: float
    available: bool
    active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductPageResponse(PageResponse):
    products: list[ProductResponse]


class ProductIdResponse(BaseModel):
    product_id: str


class PatchProductResponse(BaseModel):
    product: ProductResponse
    ignored_fields: list[str] = []


class AvailabilityResponse(BaseModel):
    product_id: str
    available: bool
    quantity: int
    reserved_quantity: int
    available_quantity: int
    low_stock_threshold: int
    is_low_stock: bool
    next_restock_date: datetime | None = None
    estimated_delivery_days: int | None = None


class ImagesResponse(BaseModel):
    product_id: str
    image_urls: list[str]


class AnalyticsResponse(BaseModel):
    total_products: int
    active_products: int
    out_of_stock: int
    low_stock: int
    average_price: float


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
class CreateCategoryRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    parent_id: str | None = None


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    parent_id: str | None = None
    active: bool


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(ge=0)


class BulkUpdateItem(BaseModel):
    item_id: str
    quantity: int = Field(ge=0)


class BulkRemoveRequest(BaseModel):
    item_ids: list[str] = Field(min_length=1)


class CalculateCartRequest(BaseModel):
    tax_rate: float = Field(ge=0, default=0.0)
    shipping_method: str | None = None


class ApplyCouponRequest(BaseModel):
    coupon_code: str = Field(min_length=1, max_length=100)


class ShareCartRequest(BaseModel):
    shared_with: str | None = None


class CartItemResponse(BaseModel):
    id: str
    product_id: str
    quantity: int
    price: float | None = None
    added_at: datetime | None = None


class CartResponse(BaseModel):
    cart_id: str
    user_id: str
    items: list[CartItemResponse]
    coupon_code: str | None = None


class CartTotalsResponse(BaseModel):
    subtotal: float
    tax: float
    shipping: float
    discount: float
    total: float


class CartValidationResponse(BaseModel):
    is_valid: bool
    issues: list[str]


class CartShareResponse(BaseModel):
    share_id: str
    shared_with: str | None = None
    share_link: str


class SharedCartResponse(BaseModel):
    share_id: str
    owner_id: str
    shared_with: str | None = None
    items: list[CartItemResponse]


class AbandonmentResponse(BaseModel):
    item_count: int
    last_modified: datetime | None = None


class WishlistItemResponse(BaseModel):
    id: str
    product_id: str
    quantity: int
    added_at: datetime | None = None


class WishlistResponse(BaseModel):
    wishlist_id: str | None = None
    user_id: str
    items: list[WishlistItemResponse]


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    shipping_address: AddressSchema | None = None
    billing_address: AddressSchema | None = None
    payment_method: str | None = None
    payment_details: dict[str, Any] | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": {
                        "street": "123 Main St",
                        "city": "Springfield",
                        "state": "IL",
                        "postal_code": "62701",
                        "country": "US",
                    },
                    "payment_method": "credit_card",
                }
            ]
        }
    }


class DirectOrderRequest(PlaceOrderRequest):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(min_length=1, max_length=50)
    tracking_number: str | None = None
    shipping_carrier: str | None = None
    estimated_delivery: datetime | None = None


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: str | None = None
    quantity: int
    price: float


class OrderResponse(BaseModel):
    id: str
    user_id: str
    origin: str
    status: str
    items: list[OrderItemResponse]
    subtotal: float
    tax: float
    shipping_cost: float
    total: float
    shipping_address: AddressSchema | None = None
    billing_address: AddressSchema | None = None
    payment_method: str | None = None
    tracking_number: str | None = None
    shipping_carrier: str | None = None
    created_at: datetime | None = None


class OrderSummaryResponse(BaseModel):
    id: str
    status: str
    total: float
    created_at: datetime | None = None
    item_count: int


class OrderPageResponse(PageResponse):
    orders: list[OrderSummaryResponse]


class OrderTrackingResponse(BaseModel):
    order_id: str
    status: str
    estimated_delivery: datetime | None = None
    tracking_number: str | None = None
    shipping_carrier: str | None = None
    updates: list[str]
