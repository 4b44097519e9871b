"""Domain tests for the Token aggregate."""

from datetime import UTC, datetime, timedelta

import pytest
from identity.token.token import Token
from protean.exceptions import ValidationError


class TestIssue:
    def test_issue_sets_expiry(self):
        token = Token.issue("user-001", ttl_days=30)
        assert token.user_id == "user-001"
        assert token.deleted is False
        assert timedelta(days=29) < token.expires_at - datetime.now(UTC) <= timedelta(days=30)

    def test_values_are_unique_and_opaque(self):
        first = Token.issue("user-001", ttl_days=1)
        second = Token.issue("user-001", ttl_days=1)
        assert first.value != second.value
        assert len(first.value) >= 32


class TestValidity:
    def test_fresh_token_is_valid(self):
        assert Token.issue("user-001", ttl_days=1).is_valid() is True

    def test_expired_token_is_invalid(self):
        token = Token.issue("user-001", ttl_days=1)
        assert token.is_valid(now=datetime.now(UTC) + timedelta(days=2)) is False

    def test_naive_expiry_is_treated_as_utc(self):
        token = Token.issue("user-001", ttl_days=1)
        token.expires_at = (datetime.now(UTC) + timedelta(hours=1)).replace(tzinfo=None)
        assert token.is_valid() is True

    def test_revoked_token_is_invalid(self):
        token = Token.issue("user-001", ttl_days=1)
        token.revoke()
        assert token.is_valid() is False

    def test_cannot_revoke_twice(self):
        token = Token.issue("user-001", ttl_days=1)
        token.revoke()
        with pytest.raises(ValidationError):
            token.revoke()
