"""Scripted chat that collects contact fields the resume did not yield.

The chat walks through the missing fields in a fixed order. Each answer is
checked with the same validators the extraction engine uses, and rejected
answers get a hint about what was wrong.
"""

import re
from dataclasses import dataclass

from app.models.schemas import ExtractedInfo
from app.services.normalizer import normalize_email, normalize_name, normalize_phone, phone_digits
from app.services.validators import (
    MAX_PHONE_DIGITS,
    MIN_PHONE_DIGITS,
    PLACEHOLDER_EMAIL_DOMAINS,
    validate_email,
    validate_name,
    validate_phone,
)

FIELD_ORDER = ("Name", "Email", "Phone")

# Field label -> attribute on ExtractedInfo / CandidateDocument
FIELD_ATTRIBUTES = {"Name": "name", "Email": "email", "Phone": "phone"}

_PROMPTS = {
    "Name": 'I need your full name. Please provide your first and last name (e.g., "Sanket Trivedi").',
    "Email": 'I need your email address. Please provide your email (e.g., "your.name@gmail.com").',
    "Phone": 'I need your phone number. Please provide your phone number (e.g., "(+91) 12123-4567").',
}

_NAME_CHARS = re.compile(r"^[A-Za-z\s]+$")


@dataclass(frozen=True)
class FieldReply:
    """Outcome of one chat answer for a field."""

    valid: bool
    message: str
    value: str | None = None


def missing_fields(info: ExtractedInfo) -> list[str]:
    """Return the field labels that extraction left empty, in chat order."""
    return [field for field in FIELD_ORDER if getattr(info, FIELD_ATTRIBUTES[field]) is None]


def prompt_for(field: str, first: bool = False) -> str:
    """Return the chat prompt asking for *field*.

    The first prompt of a conversation explains why the chat is asking.
    """
    prompt = _PROMPTS[field]
    if first:
        return (
            "Hi! I couldn't find all of your contact details in your resume. "
            + prompt
        )
    return "Now " + prompt


def completion_message() -> str:
    return (
        "Perfect! I now have all the information needed:\n\n"
        "✓ Name: Complete\n"
        "✓ Email: Complete\n"
        "✓ Phone: Complete\n\n"
        "You're all set to start the interview. Good luck!"
    )


def _name_hint(answer: str) -> str:
    if len(answer) < 2:
        return "Please provide a longer name. I need at least your first and last name."
    if not _NAME_CHARS.match(answer):
        return "Please use only letters and spaces in your name. No numbers or special characters."
    if len(answer.split()) < 2:
        return 'Please provide both your first and last name (e.g., "Sanket Trivedi").'
    return 'Please provide a valid full name with only letters, like "Sanket Trivedi".'


def _email_hint(answer: str) -> str:
    if "@" not in answer:
        return "Please include an @ symbol in your email address."
    if "." not in answer:
        return "Please include a domain with a dot (e.g., gmail.com) in your email."
    domain = answer.rsplit("@", maxsplit=1)[-1].strip().lower()
    if domain in PLACEHOLDER_EMAIL_DOMAINS:
        return "Please provide your real email address, not an example one."
    return 'Please provide a valid email address like "your.name@gmail.com".'


def _phone_hint(answer: str) -> str:
    digit_count = len(phone_digits(answer))
    if digit_count < MIN_PHONE_DIGITS:
        return f"Please provide a phone number with at least {MIN_PHONE_DIGITS} digits."
    if digit_count > MAX_PHONE_DIGITS:
        return f"Please provide a shorter phone number (maximum {MAX_PHONE_DIGITS} digits)."
    return 'Please provide a valid phone number like "(+91) 12123-4567".'


def collect_field(field: str, answer: str) -> FieldReply:
    """Validate a chat answer for *field* and build the reply.

    Args:
        field: One of "Name", "Email" or "Phone".
        answer: Free text typed by the candidate.

    Returns:
        A FieldReply with the normalized value when the answer is valid,
        or a hint explaining what to fix.

    Raises:
        ValueError: If *field* is not a known field label.
    """
    answer = answer.strip()

    if field == "Name":
        if not validate_name(answer):
            return FieldReply(valid=False, message=_name_hint(answer))
        value = normalize_name(answer)
        return FieldReply(valid=True, message=f'Perfect! I have your name: "{value}".', value=value)

    if field == "Email":
        if not validate_email(answer):
            return FieldReply(valid=False, message=_email_hint(answer))
        value = normalize_email(answer)
        return FieldReply(valid=True, message=f"Great! I have your email: {value}.", value=value)

    if field == "Phone":
        if not validate_phone(answer):
            return FieldReply(valid=False, message=_phone_hint(answer))
        value = normalize_phone(answer)
        return FieldReply(
            valid=True, message=f"Excellent! I have your phone number: {value}.", value=value
        )

    raise ValueError(f"Unknown field: {field!r}")
