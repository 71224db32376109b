"""
Tests for the contact field validators.
"""

import pytest

from app.services.validators import validate_email, validate_name, validate_phone


class TestValidateName:
    """Test full-name validation."""

    @pytest.mark.parametrize(
        "name",
        ["John Doe", "  Sarah Johnson  ", "Mary Anne Van Buren", "jane smith"],
    )
    def test_accepts_plausible_names(self, name):
        assert validate_name(name)

    @pytest.mark.parametrize(
        "name",
        [
            "John",  # single word
            "J Doe",  # one-letter word
            "John Doe 3rd",  # digits
            "John O'Neil",  # punctuation
            "Anna Maria Lisa Rose Smith",  # five words
            "A" * 30 + " " + "B" * 30,  # longer than 50 characters
            "",
        ],
    )
    def test_rejects_malformed_names(self, name):
        assert not validate_name(name)

    def test_rejects_job_titles(self):
        """Titles shaped like names are still rejected."""
        assert not validate_name("Software Engineer")
        assert not validate_name("Senior Developer")
        assert not validate_name("John Intern")

    def test_exclusion_is_case_insensitive(self):
        assert not validate_name("John MANAGER")


class TestValidateEmail:
    """Test email validation."""

    def test_accepts_and_ignores_case_and_padding(self):
        assert validate_email("jane.doe@corp.com")
        assert validate_email("  Jane.Doe@Corp.COM ")

    @pytest.mark.parametrize(
        "domain", ["example.com", "test.com", "sample.com", "domain.com"]
    )
    def test_rejects_placeholder_domains(self, domain):
        assert not validate_email(f"someone@{domain}")

    @pytest.mark.parametrize(
        "email",
        [
            "no-at-sign.com",
            "two@@corp.com",
            ".jane@corp.com",
            "jane.@corp.com",
            "ja..ne@corp.com",
            "jane@corp..com",
            "jane@.corp.com",
            "jane@a.b",  # single-letter top-level domain
            "x" * 65 + "@corp.com",
            "jane@corp.c",
        ],
    )
    def test_rejects_invalid_addresses(self, email):
        assert not validate_email(email)


class TestValidatePhone:
    """Test phone validation."""

    @pytest.mark.parametrize(
        "phone",
        [
            "(212) 555-7890",
            "+1 212 555 7890",
            "5551234567",
            "+91 98765 43210",
            "+44 20 7946 0958",
        ],
    )
    def test_accepts_known_shapes(self, phone):
        assert validate_phone(phone)

    def test_rejects_short_and_long_numbers(self):
        assert not validate_phone("555-1234")
        assert not validate_phone("1234567890123456")

    def test_rejects_numbers_starting_with_zero(self):
        """Enough digits is not enough: no shape accepts a leading zero."""
        assert not validate_phone("0123456789")

    def test_inner_plus_signs_are_dropped(self):
        assert validate_phone("212+555+7890")
