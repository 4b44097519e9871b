from identity.domain import identity
from identity.shared.email import normalize_email
from identity.user.user import User


@identity.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email) -> User | None:
        matches = self._dao.query.filter(email=normalize_email(email)).all().items
        return matches[0] if matches else None
