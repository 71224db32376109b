"""Pattern bank for resume contact extraction.

Each field owns an ordered tuple of patterns, highest priority first. Every
pattern exposes the candidate value through a named group ``value`` so the
extractor can strip labels and surrounding context uniformly.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class FieldPattern:
    """A compiled, stateless matcher for one textual context of a field."""

    label: str
    regex: re.Pattern

    def candidates(self, text: str) -> Iterator[str]:
        """Yield every captured value, left to right as found in *text*."""
        for match in self.regex.finditer(text):
            value = match.group("value")
            if value:
                yield value


def _pattern(label: str, expr: str, flags: int = 0) -> FieldPattern:
    return FieldPattern(label=label, regex=re.compile(expr, flags))


_EMAIL = r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"
# A labeled address must start after its label, not inside a longer word.
_EMAIL_START = r"(?<![\w.%+-])"

EMAIL_PATTERNS: tuple[FieldPattern, ...] = (
    _pattern(
        "labeled",
        rf"(?:e-?mail|mail|contact)[:\s]*{_EMAIL_START}(?P<value>{_EMAIL})",
        re.IGNORECASE,
    ),
    _pattern(
        "contact_section",
        rf"(?:contact|reach|correspondence)[\s\S]{{0,50}}?{_EMAIL_START}(?P<value>{_EMAIL})",
        re.IGNORECASE,
    ),
    _pattern(
        "bare",
        r"\b(?P<value>[a-zA-Z0-9][a-zA-Z0-9._%+-]*@[a-zA-Z0-9][a-zA-Z0-9.-]*\.[a-zA-Z]{2,})\b",
    ),
    _pattern("last_resort", rf"(?P<value>{_EMAIL})"),
)

PHONE_PATTERNS: tuple[FieldPattern, ...] = (
    _pattern(
        "north_american",
        r"\b(?P<value>(?:\+?1[-\s.]?)?\(?[0-9]{3}\)?[-\s.]?[0-9]{3}[-\s.]?[0-9]{4})\b",
    ),
    _pattern(
        "international",
        r"\b(?P<value>(?:\+?[1-9][0-9]{0,3}[-\s.]?)?\(?[0-9]{2,4}\)?[-\s.]?[0-9]{3,4}[-\s.]?[0-9]{3,4})\b",
    ),
    _pattern("indian", r"\b(?P<value>(?:\+?91[-\s.]?)?[0-9]{10})\b"),
    _pattern(
        "labeled",
        r"(?:phone|mobile|cell|tel|contact|number)[:\s]*(?P<value>\+?[0-9\s().-]{10,15})",
        re.IGNORECASE,
    ),
    _pattern("grouped", r"\b(?P<value>[0-9]{3}[-\s.]?[0-9]{3}[-\s.]?[0-9]{4})\b"),
    # Deliberately broad: also catches IDs and long numeric runs.
    _pattern("digit_run", r"\b(?P<value>[0-9]{10,15})\b"),
)

# Labels are case-insensitive; the captured name words must be capitalized.
NAME_PATTERNS: tuple[FieldPattern, ...] = (
    _pattern(
        "labeled",
        r"^[ \t]*(?i:name|full[ \t]*name|candidate[ \t]*name)[:\s]*"
        r"(?P<value>[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+){1,3})[ \t]*$",
        re.MULTILINE,
    ),
    _pattern(
        "contact_section",
        r"(?i:contact[ \t]*(?:information|info)?|personal[ \t]*(?:information|info)?)"
        r"[\s\S]{0,100}?\b(?P<value>[A-Z][a-z]{2,}(?:[ \t]+[A-Z][a-z]{2,}){1,2})\b",
    ),
    _pattern(
        "document_header",
        r"^[ \t]*(?i:resume|cv|curriculum[ \t]+vitae)[ \t]*(?i:of|for|[-:])[ \t]*"
        r"(?P<value>[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+){1,2})\b",
        re.MULTILINE,
    ),
    _pattern(
        "standalone_line",
        r"^[ \t]*(?P<value>[A-Z][a-z]{2,}(?:[ \t]+[A-Z][a-z]{2,}){1,2})[ \t]*$",
        re.MULTILINE,
    ),
    _pattern(
        "line_start",
        r"^(?P<value>[A-Z][a-z]{2,}(?:[ \t]+[A-Z][a-z]{2,}){1,2})(?=\s|$)",
        re.MULTILINE,
    ),
)

NAME_FALLBACK_LINES = 5
NAME_FALLBACK_SHAPE = re.compile(r"^[A-Z][a-z]+\s+[A-Z][a-z]+$")
