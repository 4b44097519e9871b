"""Domain tests for password hashing."""

from identity.user.passwords import hash_password, verify_password


class TestPasswords:
    def test_round_trip(self):
        hashed = hash_password("correct horse")
        assert verify_password("correct horse", hashed) is True
        assert verify_password("wrong horse", hashed) is False

    def test_hashes_are_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_missing_values_never_verify(self):
        assert verify_password("", hash_password("x")) is False
        assert verify_password("x", None) is False
