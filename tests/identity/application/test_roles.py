"""Application tests for granting roles."""

import pytest
from identity.user.registration import SignUp
from identity.user.roles import GrantRole
from identity.user.user import User
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


class TestGrantRole:
    def test_grant_admin(self):
        user_id = current_domain.process(
            SignUp(name="Ada", email="ada@example.com", password="s3cret-pass"),
            asynchronous=False,
        )
        roles = current_domain.process(GrantRole(user_id=user_id, role="admin"), asynchronous=False)
        assert roles == ["ADMIN"]
        assert current_domain.repository_for(User).get(user_id).has_role("ADMIN") is True

    def test_unknown_user(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(GrantRole(user_id="missing", role="ADMIN"), asynchronous=False)
