"""Authenticator that resolves tokens in-process against the identity domain.

Used when both services run in one process; it skips the HTTP hop but
applies exactly the same validity rules as the identity service.
"""

from store.auth.port import AuthenticatedUser, Authenticator


class LocalAuthenticator(Authenticator):
    def validate_token(self, token: str) -> AuthenticatedUser | None:
        from identity.domain import identity
        from identity.user.session import resolve_token

        with identity.domain_context():
            user = resolve_token(token)
            if user is None:
                return None
            return AuthenticatedUser(
                id=str(user.id),
                email=user.email,
                name=user.name,
                roles=tuple(user.role_list),
                is_email_verified=bool(user.is_email_verified),
            )
