"""FastAPI routes for the Store domain: products, categories, cart, wishlist and orders.

Thin adapters that translate HTTP requests into domain commands and shape
aggregates into response schemas. Catalogue reads are public; everything
else resolves the caller through `current_user`.
"""

import json

from fastapi import APIRouter, Depends, Query, Response
from protean.utils.globals import current_domain

from shared.logging import get_logger
from store.api.dependencies import current_user, require_admin
from store.api.schemas import (
    AbandonmentResponse,
    AddImagesRequest,
    AddToCartRequest,
    AnalyticsResponse,
    ApplyCouponRequest,
    AvailabilityResponse,
    BulkRemoveRequest,
    BulkUpdateItem,
    CalculateCartRequest,
    CartItemResponse,
    CartResponse,
    CartShareResponse,
    CartTotalsResponse,
    CartValidationResponse,
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    DirectOrderRequest,
    ImagesResponse,
    InventoryUpdateRequest,
    OrderItemResponse,
    OrderPageResponse,
    OrderResponse,
    OrderSummaryResponse,
    OrderTrackingResponse,
    PatchProductRequest,
    PatchProductResponse,
    PlaceOrderRequest,
    ProductIdResponse,
    ProductPageResponse,
    ProductResponse,
    ShareCartRequest,
    SharedCartResponse,
    StatusResponse,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
    WishlistItemResponse,
    WishlistResponse,
)
from store.auth import AuthenticatedUser
from store.cart.cart import Cart
from store.cart.coupons import ApplyCoupon, RemoveCoupon
from store.cart.items import (
    AddToCart,
    BulkAddToCart,
    BulkRemoveCartItems,
    BulkUpdateCartItems,
    ClearCart,
    RemoveCartItem,
    UpdateCartItem,
)
from store.cart.pricing import calculate_totals, load_products, validate_cart
from store.cart.sharing import ShareCart, find_share, shared_cart
from store.cart.wishlist import MoveFromWishlist, MoveToWishlist
from store.category.category import Category
from store.category.management import CreateCategory, list_categories
from store.order.checkout import Checkout, PlaceDirectOrder, PlaceOrderFromCart
from store.order.order import Order
from store.order.status import UpdateOrderStatus, tracking
from store.pagination import PageRequest
from store.product.inventory import AddProductImages, UpdateInventory, availability, catalogue_analytics
from store.product.management import CreateProduct, DeleteProduct, PatchProduct, UpdateProduct
from store.product.product import Product
from store.product.search import ProductSearchCriteria
from store.wishlist.wishlist import Wishlist

logger = get_logger(__name__)


def _page_request(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    sort_by: str = "id",
    sort_dir: str = "asc",
) -> PageRequest:
    return PageRequest(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)


def _dump(value):
    return json.dumps(value) if value is not None else None


# ---------------------------------------------------------------------------
# Response shaping
# ---------------------------------------------------------------------------
def _product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        sku=product.sku,
        category_id=str(product.category_id) if product.category_id else None,
        subcategory_id=str(product.subcategory_id) if product.subcategory_id else None,
        brand=product.brand,
        quantity=product.quantity or 0,
        reserved_quantity=product.reserved_quantity or 0,
        available_quantity=product.available_quantity,
        low_stock_threshold=product.low_stock_threshold or 0,
        is_low_stock=product.is_low_stock,
        weight=product.weight,
        dimensions=product.dimensions,
        custom_attributes=product.attribute_map,
        tags=product.tag_list,
        image_urls=product.image_url_list,
        rating=product.rating or 0.0,
        available=product.is_available,
        active=bool(product.active),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def _product_page(page) -> ProductPageResponse:
    return ProductPageResponse(
        products=[_product_response(p) for p in page.items],
        page=page.page,
        size=page.size,
        total=page.total,
        total_pages=page.total_pages,
    )


def _cart_items(cart: Cart) -> list[CartItemResponse]:
    products = load_products(cart)
    items = []
    for item in cart.items:
        product = products.get(str(item.product_id))
        items.append(
            CartItemResponse(
                id=str(item.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
                price=product.price if product else None,
                added_at=item.added_at,
            )
        )
    return items


def _cart_response(cart: Cart) -> CartResponse:
    return CartResponse(
        cart_id=str(cart.id),
        user_id=str(cart.user_id),
        items=_cart_items(cart),
        coupon_code=cart.coupon_code,
    )


def _cart_item_response(user_id, item_id) -> CartItemResponse:
    cart = current_domain.repository_for(Cart).for_user(user_id)
    return next(i for i in _cart_items(cart) if i.id == str(item_id))


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        user_id=str(order.user_id),
        origin=order.origin,
        status=order.status,
        items=[
            OrderItemResponse(
                id=str(item.id),
                product_id=str(item.product_id),
                product_name=item.product_name,
                quantity=item.quantity,
                price=item.price,
            )
            for item in order.items
        ],
        subtotal=order.subtotal,
        tax=order.tax,
        shipping_cost=order.shipping_cost,
        total=order.total,
        shipping_address=order.shipping_address.to_dict() if order.shipping_address else None,
        billing_address=order.billing_address.to_dict() if order.billing_address else None,
        payment_method=order.payment_method,
        tracking_number=order.tracking_number,
        shipping_carrier=order.shipping_carrier,
        created_at=order.created_at,
    )


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=ProductPageResponse)
async def list_products(request: PageRequest = Depends(_page_request)) -> ProductPageResponse:
    page = current_domain.repository_for(Product).list_active(request)
    return _product_page(page)


@product_router.get("/search", response_model=ProductPageResponse)
async def search_products(
    name: str | None = None,
    category: str | None = None,
    brand: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    available: bool | None = None,
    min_rating: float | None = None,
    request: PageRequest = Depends(_page_request),
) -> ProductPageResponse:
    criteria = ProductSearchCriteria(
        name=name,
        category=category,
        brand=brand,
        min_price=min_price,
        max_price=max_price,
        available=available,
        min_rating=min_rating,
    )
    page = current_domain.repository_for(Product).search(criteria, request)
    return _product_page(page)


@product_router.get("/recommendations/{user_id}", response_model=list[ProductResponse])
async def recommend_products(user_id: str, limit: int = Query(10, ge=1, le=50)) -> list[ProductResponse]:
    """Top-rated products in stock. Not personalised yet."""
    products = current_domain.repository_for(Product).top_rated(limit)
    return [_product_response(p) for p in products]


@product_router.get("/category/{category_id}", response_model=ProductPageResponse)
async def products_by_category(
    category_id: str,
    subcategory_id: str | None = None,
    request: PageRequest = Depends(_page_request),
) -> ProductPageResponse:
    page = current_domain.repository_for(Product).by_category(category_id, request, subcategory_id=subcategory_id)
    return _product_page(page)


@product_router.get("/categories", response_model=list[CategoryResponse])
async def get_categories() -> list[CategoryResponse]:
    return [
        CategoryResponse(
            id=str(c.id),
            name=c.name,
            description=c.description,
            parent_id=str(c.parent_id) if c.parent_id else None,
            active=bool(c.active),
        )
        for c in list_categories()
    ]


@product_router.post("/categories", status_code=201, response_model=CategoryResponse)
async def create_category(
    body: CreateCategoryRequest,
    _: AuthenticatedUser = Depends(require_admin),
) -> CategoryResponse:
    category_id = current_domain.process(
        CreateCategory(name=body.name, description=body.description, parent_id=body.parent_id),
        asynchronous=False,
    )
    category = current_domain.repository_for(Category).get(category_id)
    return CategoryResponse(
        id=str(category.id),
        name=category.name,
        description=category.description,
        parent_id=str(category.parent_id) if category.parent_id else None,
        active=bool(category.active),
    )


@product_router.get("/analytics", response_model=AnalyticsResponse)
async def product_analytics(
    product_id: str | None = None,
    _: AuthenticatedUser = Depends(require_admin),
) -> AnalyticsResponse:
    repo = current_domain.repository_for(Product)
    products = [repo.get_active(product_id)] if product_id else repo.all_live()
    return AnalyticsResponse(**catalogue_analytics(products))


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return _product_response(current_domain.repository_for(Product).get_active(product_id))


@product_router.get("/{product_id}/availability", response_model=AvailabilityResponse)
async def get_availability(product_id: str) -> AvailabilityResponse:
    product = current_domain.repository_for(Product).get_active(product_id)
    return AvailabilityResponse(**availability(product))


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(
    body: CreateProductRequest,
    _: AuthenticatedUser = Depends(require_admin),
) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        price=body.price,
        description=body.description,
        category_id=body.category_id,
        subcategory_id=body.subcategory_id,
        brand=body.brand,
        quantity=body.quantity,
        low_stock_threshold=body.low_stock_threshold,
        weight=body.weight,
        dimensions=body.dimensions,
        custom_attributes=_dump(body.custom_attributes),
        tags=_dump(body.tags),
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    _: AuthenticatedUser = Depends(require_admin),
) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        **body.model_dump(exclude_none=True, exclude={"custom_attributes", "tags"}),
        custom_attributes=_dump(body.custom_attributes),
        tags=_dump(body.tags),
    )
    current_domain.process(command, asynchronous=False)
    return _product_response(current_domain.repository_for(Product).get_active(product_id))


@product_router.patch("/{product_id}", response_model=PatchProductResponse)
async def patch_product(
    product_id: str,
    body: PatchProductRequest,
    _: AuthenticatedUser = Depends(require_admin),
) -> PatchProductResponse:
    ignored = body.ignored_fields()
    if ignored:
        logger.warning("Ignoring unknown product fields", product_id=product_id, fields=ignored)

    known = {name: value for name, value in body.model_dump(exclude_none=True).items() if name not in ignored}
    known.pop("custom_attributes", None)
    known.pop("tags", None)

    command = PatchProduct(
        product_id=product_id,
        **known,
        custom_attributes=_dump(body.custom_attributes),
        tags=_dump(body.tags),
    )
    current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get_active(product_id)
    return PatchProductResponse(product=_product_response(product), ignored_fields=ignored)


@product_router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str, _: AuthenticatedUser = Depends(require_admin)) -> Response:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return Response(status_code=204)


@product_router.patch("/{product_id}/inventory", response_model=ProductResponse)
async def update_inventory(
    product_id: str,
    body: InventoryUpdateRequest,
    _: AuthenticatedUser = Depends(require_admin),
) -> ProductResponse:
    current_domain.process(
        UpdateInventory(product_id=product_id, **body.model_dump(exclude_none=True)),
        asynchronous=False,
    )
    return _product_response(current_domain.repository_for(Product).get_active(product_id))


@product_router.post("/{product_id}/images", response_model=ImagesResponse)
async def add_images(
    product_id: str,
    body: AddImagesRequest,
    _: AuthenticatedUser = Depends(require_admin),
) -> ImagesResponse:
    urls = current_domain.process(
        AddProductImages(product_id=product_id, urls=json.dumps(body.urls)),
        asynchronous=False,
    )
    return ImagesResponse(product_id=product_id, image_urls=urls)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(user: AuthenticatedUser = Depends(current_user)) -> CartResponse:
    return _cart_response(current_domain.repository_for(Cart).for_user(user.id))


@cart_router.post("/add", response_model=CartItemResponse)
async def add_to_cart(body: AddToCartRequest, user: AuthenticatedUser = Depends(current_user)) -> CartItemResponse:
    item_id = current_domain.process(
        AddToCart(user_id=user.id, product_id=body.product_id, quantity=body.quantity),
        asynchronous=False,
    )
    return _cart_item_response(user.id, item_id)


@cart_router.put("/items/{item_id}", response_model=CartItemResponse)
async def update_cart_item(
    item_id: str,
    body: UpdateCartItemRequest,
    user: AuthenticatedUser = Depends(current_user),
):
    result = current_domain.process(
        UpdateCartItem(user_id=user.id, item_id=item_id, quantity=body.quantity),
        asynchronous=False,
    )
    if result is None:
        # Quantity zero removed the line
        return Response(status_code=204)
    return _cart_item_response(user.id, result)


@cart_router.delete("/items/{item_id}", status_code=204)
async def remove_cart_item(item_id: str, user: AuthenticatedUser = Depends(current_user)) -> Response:
    current_domain.process(RemoveCartItem(user_id=user.id, item_id=item_id), asynchronous=False)
    return Response(status_code=204)


@cart_router.delete("/clear", status_code=204)
async def clear_cart(user: AuthenticatedUser = Depends(current_user)) -> Response:
    current_domain.process(ClearCart(user_id=user.id), asynchronous=False)
    return Response(status_code=204)


@cart_router.post("/calculate", response_model=CartTotalsResponse)
async def calculate_cart(
    body: CalculateCartRequest,
    user: AuthenticatedUser = Depends(current_user),
) -> CartTotalsResponse:
    cart = current_domain.repository_for(Cart).for_user(user.id)
    totals = calculate_totals(cart, tax_rate=body.tax_rate, shipping_method=body.shipping_method)
    return CartTotalsResponse(
        subtotal=totals.subtotal,
        tax=totals.tax,
        shipping=totals.shipping,
        discount=totals.discount,
        total=totals.total,
    )


@cart_router.post("/coupon", response_model=CartResponse)
async def apply_coupon(body: ApplyCouponRequest, user: AuthenticatedUser = Depends(current_user)) -> CartResponse:
    current_domain.process(ApplyCoupon(user_id=user.id, coupon_code=body.coupon_code), asynchronous=False)
    return _cart_response(current_domain.repository_for(Cart).for_user(user.id))


@cart_router.delete("/coupon", response_model=CartResponse)
async def remove_coupon(user: AuthenticatedUser = Depends(current_user)) -> CartResponse:
    current_domain.process(RemoveCoupon(user_id=user.id), asynchronous=False)
    return _cart_response(current_domain.repository_for(Cart).for_user(user.id))


@cart_router.post("/validate", response_model=CartValidationResponse)
async def validate(user: AuthenticatedUser = Depends(current_user)) -> CartValidationResponse:
    cart = current_domain.repository_for(Cart).for_user(user.id)
    validation = validate_cart(cart)
    return CartValidationResponse(is_valid=validation.is_valid, issues=validation.issues)


@cart_router.post("/bulk-add", response_model=list[CartItemResponse])
async def bulk_add(
    body: list[AddToCartRequest],
    user: AuthenticatedUser = Depends(current_user),
) -> list[CartItemResponse]:
    item_ids = current_domain.process(
        BulkAddToCart(user_id=user.id, items=json.dumps([entry.model_dump() for entry in body])),
        asynchronous=False,
    )
    cart = current_domain.repository_for(Cart).for_user(user.id)
    items = {i.id: i for i in _cart_items(cart)}
    return [items[item_id] for item_id in dict.fromkeys(item_ids)]


@cart_router.put("/bulk-update", response_model=list[CartItemResponse])
async def bulk_update(
    body: list[BulkUpdateItem],
    user: AuthenticatedUser = Depends(current_user),
) -> list[CartItemResponse]:
    item_ids = current_domain.process(
        BulkUpdateCartItems(user_id=user.id, items=json.dumps([entry.model_dump() for entry in body])),
        asynchronous=False,
    )
    cart = current_domain.repository_for(Cart).for_user(user.id)
    return [i for i in _cart_items(cart) if i.id in item_ids]


@cart_router.delete("/bulk-remove", status_code=204)
async def bulk_remove(body: BulkRemoveRequest, user: AuthenticatedUser = Depends(current_user)) -> Response:
    current_domain.process(
        BulkRemoveCartItems(user_id=user.id, item_ids=json.dumps(body.item_ids)),
        asynchronous=False,
    )
    return Response(status_code=204)


@cart_router.post("/items/{item_id}/move-to-wishlist", response_model=StatusResponse)
async def move_to_wishlist(item_id: str, user: AuthenticatedUser = Depends(current_user)) -> StatusResponse:
    current_domain.process(MoveToWishlist(user_id=user.id, item_id=item_id), asynchronous=False)
    return StatusResponse()


@cart_router.post("/move-from-wishlist/{product_id}", response_model=CartItemResponse)
async def move_from_wishlist(
    product_id: str,
    quantity: int = Query(1, ge=1),
    user: AuthenticatedUser = Depends(current_user),
) -> CartItemResponse:
    item_id = current_domain.process(
        MoveFromWishlist(user_id=user.id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )
    return _cart_item_response(user.id, item_id)


@cart_router.post("/share", response_model=CartShareResponse)
async def share_cart(body: ShareCartRequest, user: AuthenticatedUser = Depends(current_user)) -> CartShareResponse:
    share_id = current_domain.process(ShareCart(user_id=user.id, shared_with=body.shared_with), asynchronous=False)
    share = find_share(share_id)
    return CartShareResponse(share_id=share.share_id, shared_with=share.shared_with, share_link=share.share_link)


@cart_router.get("/shared/{share_id}", response_model=SharedCartResponse)
async def get_shared_cart(share_id: str) -> SharedCartResponse:
    share, cart = shared_cart(share_id)
    return SharedCartResponse(
        share_id=share.share_id,
        owner_id=str(share.owner_id),
        shared_with=share.shared_with,
        items=_cart_items(cart),
    )


@cart_router.get("/analytics/abandonment", response_model=AbandonmentResponse)
async def abandonment(user: AuthenticatedUser = Depends(current_user)) -> AbandonmentResponse:
    cart = current_domain.repository_for(Cart).for_user(user.id)
    return AbandonmentResponse(item_count=cart.item_count, last_modified=cart.updated_at)


# ---------------------------------------------------------------------------
# Wishlist Router
# ---------------------------------------------------------------------------
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@wishlist_router.get("", response_model=WishlistResponse)
async def get_wishlist(user: AuthenticatedUser = Depends(current_user)) -> WishlistResponse:
    wishlist = current_domain.repository_for(Wishlist).find_for_user(user.id)
    if wishlist is None:
        return WishlistResponse(user_id=user.id, items=[])
    return WishlistResponse(
        wishlist_id=str(wishlist.id),
        user_id=str(wishlist.user_id),
        items=[
            WishlistItemResponse(
                id=str(item.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
                added_at=item.added_at,
            )
            for item in wishlist.items
        ],
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _placement_fields(body: PlaceOrderRequest) -> dict:
    return {
        "shipping_address": body.shipping_address.model_dump_json() if body.shipping_address else None,
        "billing_address": body.billing_address.model_dump_json() if body.billing_address else None,
        "payment_method": body.payment_method,
        "payment_details": _dump(body.payment_details),
    }


def _placed(order_id, user: AuthenticatedUser) -> OrderResponse:
    return _order_response(current_domain.repository_for(Order).get_for_user(order_id, user.id))


@order_router.post("/checkout", status_code=201, response_model=OrderResponse)
async def checkout(body: PlaceOrderRequest, user: AuthenticatedUser = Depends(current_user)) -> OrderResponse:
    order_id = current_domain.process(Checkout(user_id=user.id, **_placement_fields(body)), asynchronous=False)
    return _placed(order_id, user)


@order_router.post("/from-cart", status_code=201, response_model=OrderResponse)
async def order_from_cart(body: PlaceOrderRequest, user: AuthenticatedUser = Depends(current_user)) -> OrderResponse:
    order_id = current_domain.process(
        PlaceOrderFromCart(user_id=user.id, **_placement_fields(body)),
        asynchronous=False,
    )
    return _placed(order_id, user)


@order_router.post("/direct", status_code=201, response_model=OrderResponse)
async def direct_order(body: DirectOrderRequest, user: AuthenticatedUser = Depends(current_user)) -> OrderResponse:
    order_id = current_domain.process(
        PlaceDirectOrder(
            user_id=user.id,
            product_id=body.product_id,
            quantity=body.quantity,
            **_placement_fields(body),
        ),
        asynchronous=False,
    )
    return _placed(order_id, user)


@order_router.get("", response_model=OrderPageResponse)
async def list_orders(
    status: str | None = None,
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    sort_by: str = "created_at",
    sort_dir: str = "desc",
    user: AuthenticatedUser = Depends(current_user),
) -> OrderPageResponse:
    request = PageRequest(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)
    result = current_domain.repository_for(Order).for_user(user.id, request, status=status)
    return OrderPageResponse(
        orders=[
            OrderSummaryResponse(
                id=str(o.id),
                status=o.status,
                total=o.total,
                created_at=o.created_at,
                item_count=o.item_count,
            )
            for o in result.items
        ],
        page=result.page,
        size=result.size,
        total=result.total,
        total_pages=result.total_pages,
    )


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, user: AuthenticatedUser = Depends(current_user)) -> OrderResponse:
    return _placed(order_id, user)


@order_router.get("/{order_id}/tracking", response_model=OrderTrackingResponse)
async def track_order(order_id: str, user: AuthenticatedUser = Depends(current_user)) -> OrderTrackingResponse:
    order = current_domain.repository_for(Order).get_for_user(order_id, user.id)
    return OrderTrackingResponse(**tracking(order))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    _: AuthenticatedUser = Depends(require_admin),
) -> OrderResponse:
    current_domain.process(
        UpdateOrderStatus(order_id=order_id, **body.model_dump(exclude_none=True)),
        asynchronous=False,
    )
    return _order_response(current_domain.repository_for(Order).get(order_id))
