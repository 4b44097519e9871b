"""Token aggregate: opaque bearer tokens issued at login.

A token is valid while it is not deleted and its expiry lies in the
future. Logging out soft-deletes the token; nothing is ever rotated or
refreshed.
"""

import secrets
from datetime import UTC, datetime, timedelta

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String

from identity.domain import identity


def _aware(moment):
    return moment if moment.tzinfo else moment.replace(tzinfo=UTC)


@identity.aggregate
class Token:
    value: String(required=True, max_length=128, unique=True)
    user_id: Identifier(required=True)
    expires_at: DateTime(required=True)
    deleted: Boolean(default=False)
    created_at: DateTime()

    @classmethod
    def issue(cls, user_id, ttl_days):
        now = datetime.now(UTC)
        return cls(
            value=secrets.token_urlsafe(48),
            user_id=str(user_id),
            expires_at=now + timedelta(days=ttl_days),
            created_at=now,
        )

    def is_valid(self, now=None):
        now = now or datetime.now(UTC)
        return not self.deleted and _aware(self.expires_at) > now

    def revoke(self):
        if self.deleted:
            raise ValidationError({"token": ["Token already revoked"]})
        self.deleted = True


@identity.repository(part_of=Token)
class TokenRepository:
    def find_live(self, value) -> Token | None:
        """The non-deleted token with this value, expired or not."""
        if not value:
            return None
        matches = self._dao.query.filter(value=value, deleted=False).all().items
        return matches[0] if matches else None
