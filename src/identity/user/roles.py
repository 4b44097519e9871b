"""Role grants: command and handler. Used from `manage.py grant-role`."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import User
from shared.logging import get_logger

logger = get_logger(__name__)


@identity.command(part_of="User")
class GrantRole:
    user_id: Identifier(required=True)
    role: String(required=True, max_length=50)


@identity.command_handler(part_of=User)
class GrantRoleHandler:
    @handle(GrantRole)
    def grant_role(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.grant_role(command.role)
        repo.add(user)
        logger.info("Role granted", user_id=str(user.id), role=command.role.upper())
        return user.role_list
