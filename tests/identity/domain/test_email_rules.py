"""Domain tests for email normalisation and structural checks."""

import pytest
from identity.shared.email import is_valid_email, normalize_email


class TestNormalize:
    def test_trims_and_lower_cases(self):
        assert normalize_email("  Jane@Example.COM ") == "jane@example.com"

    def test_none_becomes_empty(self):
        assert normalize_email(None) == ""


class TestIsValidEmail:
    @pytest.mark.parametrize(
        "address",
        ["jane@example.com", "jane.doe+tag@mail.example.co.uk", "j_d@sub-domain.example.org"],
    )
    def test_valid(self, address):
        assert is_valid_email(address) is True

    @pytest.mark.parametrize(
        "address",
        [
            "",
            None,
            "plain",
            "@example.com",
            "jane@",
            "jane@example",
            "jane@@example.com",
            ".jane@example.com",
            "jane..doe@example.com",
            "jane@-example.com",
            "jane doe@example.com",
            "jane@exa;mple.com",
        ],
    )
    def test_invalid(self, address):
        assert is_valid_email(address) is False
