"""Candidate contact extraction from resume text.

Extracts name, email and phone number by running an ordered bank of regex
patterns per field. Every match is cleaned and passed through the field's
validator; the first candidate that validates wins, in pattern-priority
order and then left-to-right within a pattern. A field with no surviving
candidate is left as None instead of being guessed.
"""

import logging
from collections.abc import Callable, Iterable

from app.models.schemas import ExtractedInfo
from app.services.normalizer import normalize_email, normalize_name, normalize_phone
from app.services.patterns import (
    EMAIL_PATTERNS,
    NAME_FALLBACK_LINES,
    NAME_FALLBACK_SHAPE,
    NAME_PATTERNS,
    PHONE_PATTERNS,
    FieldPattern,
)
from app.services.validators import (
    NAME_EXCLUDED_WORDS,
    validate_email,
    validate_name,
    validate_phone,
)

logger = logging.getLogger(__name__)


def _first_valid(
    field: str,
    text: str,
    patterns: Iterable[FieldPattern],
    clean: Callable[[str], str],
    validate: Callable[[str], bool],
) -> str | None:
    """Return the first cleaned candidate that passes *validate*, or None."""
    for pattern in patterns:
        for raw in pattern.candidates(text):
            candidate = clean(raw)
            if validate(candidate):
                logger.debug("%s matched by '%s' pattern", field, pattern.label)
                return candidate
    return None


def _fallback_name(text: str) -> str | None:
    """Look for a bare "First Last" line among the first non-blank lines."""
    lines = [line.strip() for line in text.splitlines() if line.strip()]

    for line in lines[:NAME_FALLBACK_LINES]:
        if len(line) < 4 or len(line) > 30:
            continue
        if any(ch.isdigit() for ch in line):
            continue
        if not NAME_FALLBACK_SHAPE.match(line):
            continue
        if any(word.lower() in NAME_EXCLUDED_WORDS for word in line.split()):
            continue
        if validate_name(line):
            return normalize_name(line)
    return None


def _extract_name(text: str) -> str | None:
    name = _first_valid("name", text, NAME_PATTERNS, normalize_name, validate_name)
    if name is None:
        name = _fallback_name(text)
        if name is not None:
            logger.debug("name matched by first-lines fallback")
    return name


def _extract_email(text: str) -> str | None:
    return _first_valid("email", text, EMAIL_PATTERNS, normalize_email, validate_email)


def _extract_phone(text: str) -> str | None:
    phone = _first_valid("phone", text, PHONE_PATTERNS, str.strip, validate_phone)
    return normalize_phone(phone) if phone is not None else None


def extract_info_from_text(text: str) -> ExtractedInfo:
    """Extract candidate name, email and phone from resume text.

    Args:
        text: Plain text content of a resume.

    Returns:
        An ExtractedInfo with the normalized value of each field that was
        found, None for the rest, and the original text. Blank input
        yields an all-empty result with ``text == ""``.
    """
    if not text or not text.strip():
        return ExtractedInfo(text="")

    # Patterns anchor on "\n"; keep CRLF documents matching line-wise.
    search_text = text.replace("\r\n", "\n").replace("\r", "\n")

    info = ExtractedInfo(
        name=_extract_name(search_text),
        email=_extract_email(search_text),
        phone=_extract_phone(search_text),
        text=text,
    )

    logger.info(
        "Extracted contact info (name=%s, email=%s, phone=%s) from %d chars",
        info.name is not None,
        info.email is not None,
        info.phone is not None,
        len(text),
    )
    return info
