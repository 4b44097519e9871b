"""In-memory authenticator for development and testing.

Tokens are registered up front; anything else is rejected.
"""

from store.auth.port import AuthenticatedUser, Authenticator


class FakeAuthenticator(Authenticator):
    def __init__(self) -> None:
        self.users: dict[str, AuthenticatedUser] = {}
        self.calls: list[str] = []

    def register(self, token: str, user: AuthenticatedUser) -> None:
        self.users[token] = user

    def validate_token(self, token: str) -> AuthenticatedUser | None:
        self.calls.append(token)
        return self.users.get(token)
