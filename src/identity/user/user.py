"""User aggregate root.

Users sign up with a name, an email address and a password. Only the
password hash is stored. Roles are kept as a JSON list of upper-case role
names; the store grants write access to holders of `ADMIN`.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, Text

from identity.domain import identity
from identity.shared.email import is_valid_email, normalize_email
from identity.user.events import RoleGranted, UserRegistered


@identity.aggregate
class User:
    """A person who can log in and obtain tokens."""

    name: String(max_length=255)
    email: String(required=True, max_length=254, unique=True)
    hashed_password: String(required=True, max_length=255)
    roles: Text()  # JSON array of role names
    is_email_verified: Boolean(default=False)
    created_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if not is_valid_email(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @classmethod
    def register(cls, name, email, hashed_password):
        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=normalize_email(email),
            hashed_password=hashed_password,
            roles=json.dumps([]),
            is_email_verified=False,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                name=name,
                registered_at=now,
            )
        )
        return user

    @property
    def role_list(self):
        return json.loads(self.roles) if self.roles else []

    def has_role(self, role):
        return role.upper() in self.role_list

    def grant_role(self, role):
        role = (role or "").strip().upper()
        if not role:
            raise ValidationError({"role": ["Role name is required"]})
        if self.has_role(role):
            return

        self.roles = json.dumps(self.role_list + [role])
        self.raise_(RoleGranted(user_id=str(self.id), role=role))
