"""Login, logout and token resolution."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.token.token import Token
from identity.user.passwords import verify_password
from identity.user.user import User
from shared.config import token_ttl_days
from shared.errors import AuthenticationFailed
from shared.logging import get_logger

logger = get_logger(__name__)


@identity.command(part_of="Token")
class Login:
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)


@identity.command(part_of="Token")
class Logout:
    token: String(required=True, max_length=128)


@identity.command_handler(part_of=Token)
class SessionHandler:
    @handle(Login)
    def login(self, command):
        user = current_domain.repository_for(User).find_by_email(command.email)
        if user is None or not verify_password(command.password, user.hashed_password):
            logger.warning("Login failed")
            raise AuthenticationFailed("Invalid email or password")

        token = Token.issue(user.id, token_ttl_days())
        current_domain.repository_for(Token).add(token)
        logger.info("User logged in", user_id=str(user.id))
        return token.value

    @handle(Logout)
    def logout(self, command):
        repo = current_domain.repository_for(Token)
        token = repo.find_live(command.token)
        if token is None:
            raise ObjectNotFoundError("Token not found")

        token.revoke()
        repo.add(token)
        logger.info("User logged out", user_id=str(token.user_id))


def find_token(value) -> Token | None:
    return current_domain.repository_for(Token).find_live(value)


def resolve_token(value) -> User | None:
    """The owner of a valid token, or None for unknown, revoked or expired tokens."""
    token = find_token(value)
    if token is None or not token.is_valid():
        return None
    return current_domain.repository_for(User).get(token.user_id)
