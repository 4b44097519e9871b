"""Storefront FastAPI application.

Serves the store domain (catalogue, cart, wishlist, orders) and the
identity domain (users and tokens) from one process. Each request is
wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV selects the domain.toml overlay (e.g. "production" → PostgreSQL).
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from identity.domain import identity  # noqa: E402
from shared.errors import register_error_handlers
from shared.logging import clear_context
from store.domain import store  # noqa: E402

identity.init()
store.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/users": identity,
    "/products": store,
    "/cart": store,
    "/wishlist": store,
    "/orders": store,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Product catalogue, cart and orders, plus user authentication",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    clear_context()
    domain = _resolve_domain(request.url.path)
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
        return response
    # No domain match, pass through (health check, docs, etc.)
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from identity.api import router as identity_router  # noqa: E402
from store.api import cart_router, order_router, product_router, wishlist_router  # noqa: E402

app.include_router(identity_router)
app.include_router(product_router)
app.include_router(cart_router)
app.include_router(wishlist_router)
app.include_router(order_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "identity": {"name": identity.name},
                "store": {"name": store.name},
            },
        }
    )
