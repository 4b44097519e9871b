"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="User")
class UserRegistered:
    """A new user signed up."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    name: String()
    registered_at: DateTime(required=True)


@identity.event(part_of="User")
class RoleGranted:
    __version__ = 1

    user_id: Identifier(required=True)
    role: String(required=True)
