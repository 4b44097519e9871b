"""User signup: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.passwords import hash_password
from identity.user.user import User
from shared.logging import get_logger

logger = get_logger(__name__)


@identity.command(part_of="User")
class SignUp:
    """Create a user account from a name, email address and plain-text password."""

    name: String(max_length=255)
    email: String(required=True, max_length=254)
    password: String(required=True, min_length=6, max_length=128)


@identity.command_handler(part_of=User)
class SignUpHandler:
    @handle(SignUp)
    def sign_up(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["A user with this email already exists"]})

        user = User.register(
            name=command.name,
            email=command.email,
            hashed_password=hash_password(command.password),
        )
        repo.add(user)
        logger.info("User signed up", user_id=str(user.id))
        return str(user.id)
