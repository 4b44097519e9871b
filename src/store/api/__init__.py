"""Store domain API package."""

from store.api.routes import cart_router, order_router, product_router, wishlist_router

__all__ = ["product_router", "cart_router", "wishlist_router", "order_router"]
