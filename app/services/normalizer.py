"""Canonical forms for extracted contact fields."""

import re

_NON_PHONE_CHARS = re.compile(r"[^\d+]", re.ASCII)
_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_name(name: str) -> str:
    """Trim a name and collapse internal whitespace runs to single spaces."""
    return _WHITESPACE_RUN.sub(" ", name.strip())


def clean_phone(phone: str) -> str:
    """Keep digits and a single leading ``+``.

    Any ``+`` that is not the first character is dropped, so
    ``"+1 (555) 123-4567"`` becomes ``"+15551234567"`` and
    ``"555+123"`` becomes ``"555123"``.
    """
    cleaned = _NON_PHONE_CHARS.sub("", phone)
    prefix = "+" if cleaned.startswith("+") else ""
    return prefix + cleaned[len(prefix):].replace("+", "")


def phone_digits(phone: str) -> str:
    return clean_phone(phone).lstrip("+")


def normalize_phone(phone: str) -> str:
    """Format a phone number for display.

    Ten digits become ``(AAA) EEE-NNNN`` and eleven digits with a leading
    country code ``1`` become ``+1 (AAA) EEE-NNNN``. Anything else is
    returned as the cleaned digit string.
    """
    cleaned = clean_phone(phone)
    digits = cleaned.lstrip("+")

    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    if len(digits) == 11 and digits.startswith("1"):
        return f"+1 ({digits[1:4]}) {digits[4:7]}-{digits[7:]}"
    return cleaned
