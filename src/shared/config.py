"""Process settings read from the environment.

Persistence, brokers and the event store are configured per domain in
`domain.toml`; everything here is plain service wiring. Values are read on
every call so tests can override them with `monkeypatch.setenv`.
"""

import os


def user_service_url() -> str:
    return os.getenv("USER_SERVICE_URL", "http://localhost:8081").rstrip("/")


def auth_backend() -> str:
    """Which authenticator the store uses: `http`, `local` or `fake`."""
    return os.getenv("AUTH_BACKEND", "http").lower()


def auth_timeout_seconds() -> float:
    return float(os.getenv("AUTH_TIMEOUT_SECONDS", "5"))


def token_ttl_days() -> int:
    return int(os.getenv("TOKEN_TTL_DAYS", "30"))


def share_base_url() -> str:
    return os.getenv("SHARE_BASE_URL", "https://example.com/cart/shared/")


def order_tax_rate() -> float:
    return float(os.getenv("ORDER_TAX_RATE", "0.1"))


def order_flat_shipping() -> float:
    return float(os.getenv("ORDER_FLAT_SHIPPING", "10.0"))
