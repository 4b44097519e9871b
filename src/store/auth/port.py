"""Authenticator port (abstract interface).

The store never checks credentials itself: every bearer token is handed to
an authenticator that resolves it to a user, or to `None` when the token
is unknown, expired or cannot be checked.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

ADMIN_ROLE = "ADMIN"


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity resolved from a bearer token."""

    id: str
    email: str | None = None
    name: str | None = None
    roles: tuple[str, ...] = field(default_factory=tuple)
    is_email_verified: bool = False

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles

    @classmethod
    def from_payload(cls, payload: dict) -> "AuthenticatedUser":
        """Build from the identity service's user document."""
        roles = payload.get("roles") or []
        return cls(
            id=str(payload["id"]),
            email=payload.get("email"),
            name=payload.get("name"),
            roles=tuple(str(r.get("name") if isinstance(r, dict) else r).upper() for r in roles),
            is_email_verified=bool(payload.get("is_email_verified", False)),
        )


class Authenticator(ABC):
    """Abstract token authenticator."""

    @abstractmethod
    def validate_token(self, token: str) -> AuthenticatedUser | None:
        """Resolve a raw token value. Never raises for an invalid token."""
        ...
