"""Application tests for user signup."""

import pytest
from identity.user.registration import SignUp
from identity.user.user import User
from protean import current_domain
from protean.exceptions import ValidationError


def _sign_up(**overrides):
    defaults = {"name": "Jane Doe", "email": "jane@example.com", "password": "s3cret-pass"}
    defaults.update(overrides)
    return current_domain.process(SignUp(**defaults), asynchronous=False)


class TestSignUp:
    def test_sign_up_persists_user(self):
        user_id = _sign_up()
        user = current_domain.repository_for(User).get(user_id)
        assert user.name == "Jane Doe"
        assert user.email == "jane@example.com"
        assert user.hashed_password != "s3cret-pass"

    def test_sign_up_stores_registration_event(self):
        _sign_up()
        messages = current_domain.event_store.store.read("identity::user")
        registered = [
            m
            for m in messages
            if m.metadata and m.metadata.headers and m.metadata.headers.type == "Identity.UserRegistered.v1"
        ]
        assert len(registered) >= 1

    def test_duplicate_email_is_rejected(self):
        _sign_up()
        with pytest.raises(ValidationError) as exc:
            _sign_up(email="JANE@example.com", name="Someone Else")
        assert "email" in exc.value.messages

    def test_short_password_is_rejected(self):
        with pytest.raises(ValidationError):
            _sign_up(password="123")

    def test_invalid_email_is_rejected(self):
        with pytest.raises(ValidationError):
            _sign_up(email="not-an-email")

    def test_find_by_email_ignores_case(self):
        user_id = _sign_up()
        user = current_domain.repository_for(User).find_by_email("  JANE@EXAMPLE.COM")
        assert str(user.id) == user_id
