"""
Tests for contact field normalization.
"""

from app.services.normalizer import (
    clean_phone,
    normalize_email,
    normalize_name,
    normalize_phone,
)


def test_normalize_email():
    assert normalize_email("  Jane.Doe@Corp.COM\n") == "jane.doe@corp.com"


def test_normalize_name_collapses_whitespace():
    assert normalize_name("  Mary \t Anne  Smith ") == "Mary Anne Smith"


def test_clean_phone_keeps_only_leading_plus():
    assert clean_phone("+1 (555) 123-4567") == "+15551234567"
    assert clean_phone("555+123+4567") == "5551234567"
    assert clean_phone("++44 20") == "+4420"


def test_normalize_phone_ten_digits():
    assert normalize_phone("555.123.4567") == "(555) 123-4567"


def test_normalize_phone_us_country_code():
    assert normalize_phone("1-212-555-7890") == "+1 (212) 555-7890"
    assert normalize_phone("+1 212 555 7890") == "+1 (212) 555-7890"


def test_normalize_phone_other_lengths_pass_through_cleaned():
    assert normalize_phone("+91 98765 43210") == "+919876543210"
    assert normalize_phone("+44 20 7946 0958") == "+442079460958"
