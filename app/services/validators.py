"""Field validators for candidate contact details.

These predicates decide whether a string is an acceptable final value for a
field. The extraction engine runs every pattern match through them, and the
field-collection chat calls them directly on whatever the candidate types.
"""

import re

from app.services.normalizer import clean_phone

# Job titles, section headers and academic terms that look like names when
# capitalized at the top of a resume.
NAME_EXCLUDED_WORDS = frozenset({
    "software", "developer", "engineer", "programmer", "designer", "manager",
    "analyst", "senior", "junior", "lead", "principal", "architect",
    "consultant", "specialist", "experience", "education", "skills",
    "summary", "objective", "profile", "resume", "curriculum", "vitae",
    "contact", "personal", "professional", "technical", "frontend",
    "backend", "fullstack", "full-stack", "web", "mobile", "application",
    "system", "admin", "administrator", "coordinator", "assistant", "intern",
    "trainee", "candidate", "applicant", "student", "graduate", "bachelor",
    "master", "university", "college",
})

# Template domains: syntactically fine, never real contact data.
PLACEHOLDER_EMAIL_DOMAINS = frozenset({
    "example.com", "test.com", "sample.com", "domain.com",
})

_NAME_CHARS = re.compile(r"^[A-Za-z\s]+$")
_ALPHA_WORD = re.compile(r"^[A-Za-z]+$")
_EMAIL_SHAPE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

_PHONE_SHAPES = (
    re.compile(r"\+?1?[2-9]\d{2}[2-9]\d{2}\d{4}", re.ASCII),  # North America
    re.compile(r"\+?91[6-9]\d{9}", re.ASCII),  # India mobile
    re.compile(r"\+?[1-9]\d{7,14}", re.ASCII),  # generic international
)

MIN_PHONE_DIGITS = 10
MAX_PHONE_DIGITS = 15


def validate_name(candidate: str) -> bool:
    """Return True if *candidate* looks like a person's full name.

    Requires 2-4 alphabetic words of at least two letters each, 2-50
    characters overall, and no word from :data:`NAME_EXCLUDED_WORDS`.
    """
    name = candidate.strip()
    if len(name) < 2 or len(name) > 50:
        return False
    if not _NAME_CHARS.match(name):
        return False

    words = name.split()
    if len(words) < 2 or len(words) > 4:
        return False
    if not all(len(word) >= 2 and _ALPHA_WORD.match(word) for word in words):
        return False

    return not any(word.lower() in NAME_EXCLUDED_WORDS for word in words)


def _valid_email_part(part: str, min_len: int, max_len: int) -> bool:
    if len(part) < min_len or len(part) > max_len:
        return False
    if part.startswith(".") or part.endswith("."):
        return False
    return ".." not in part


def validate_email(candidate: str) -> bool:
    """Return True if *candidate* is a plausible, non-placeholder email."""
    email = candidate.strip().lower()
    if not _EMAIL_SHAPE.match(email):
        return False

    parts = email.split("@")
    if len(parts) != 2:
        return False
    local_part, domain = parts

    if not _valid_email_part(local_part, 1, 64):
        return False
    if not _valid_email_part(domain, 4, 255):
        return False

    return domain not in PLACEHOLDER_EMAIL_DOMAINS


def validate_phone(candidate: str) -> bool:
    """Return True if *candidate* has 10-15 digits in a recognised shape.

    Length alone is not enough: the cleaned number must also look like a
    North-American, Indian mobile or generic international number.
    """
    cleaned = clean_phone(candidate)
    digit_count = len(cleaned.lstrip("+"))
    if digit_count < MIN_PHONE_DIGITS or digit_count > MAX_PHONE_DIGITS:
        return False

    return any(shape.fullmatch(cleaned) for shape in _PHONE_SHAPES)
