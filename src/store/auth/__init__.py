"""Authenticator factory.

Provides get_authenticator() / set_authenticator() to swap implementations:
- HttpAuthenticator calls the identity service (default)
- LocalAuthenticator resolves tokens in-process
- FakeAuthenticator for development and testing

`AUTH_BACKEND` chooses the default.
"""

from shared.config import auth_backend
from store.auth.fake_adapter import FakeAuthenticator
from store.auth.http_adapter import HttpAuthenticator
from store.auth.local_adapter import LocalAuthenticator
from store.auth.port import ADMIN_ROLE, AuthenticatedUser, Authenticator

_BACKENDS = {
    "http": HttpAuthenticator,
    "local": LocalAuthenticator,
    "fake": FakeAuthenticator,
}

_current_authenticator: Authenticator | None = None


def get_authenticator() -> Authenticator:
    """Return the current authenticator, building the configured default on first use."""
    global _current_authenticator
    if _current_authenticator is None:
        backend = auth_backend()
        if backend not in _BACKENDS:
            raise ValueError(f"Unknown AUTH_BACKEND '{backend}'")
        _current_authenticator = _BACKENDS[backend]()
    return _current_authenticator


def set_authenticator(authenticator: Authenticator) -> None:
    """Override the active authenticator (useful for tests)."""
    global _current_authenticator
    _current_authenticator = authenticator


def reset_authenticator() -> None:
    global _current_authenticator
    _current_authenticator = None


def bearer_token(header: str | None) -> str | None:
    """Extract the token from an `Authorization` header; a bare token is accepted as-is."""
    if not header or not header.strip():
        return None
    value = header.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer":
        value = rest.strip()
    return value or None


def validate_token(token: str | None) -> AuthenticatedUser | None:
    if not token:
        return None
    return get_authenticator().validate_token(token)


__all__ = [
    "ADMIN_ROLE",
    "AuthenticatedUser",
    "Authenticator",
    "FakeAuthenticator",
    "HttpAuthenticator",
    "LocalAuthenticator",
    "bearer_token",
    "get_authenticator",
    "reset_authenticator",
    "set_authenticator",
    "validate_token",
]
