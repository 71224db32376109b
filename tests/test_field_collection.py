"""
Tests for the field-collection chat script.
"""

import pytest

from app.models.schemas import ExtractedInfo
from app.services.field_collection import (
    collect_field,
    completion_message,
    missing_fields,
    prompt_for,
)


def test_missing_fields_in_chat_order():
    info = ExtractedInfo(email="jane@corp.io", text="...")
    assert missing_fields(info) == ["Name", "Phone"]


def test_nothing_missing():
    info = ExtractedInfo(name="Jane Roe", email="jane@corp.io", phone="(212) 555-7890", text="...")
    assert missing_fields(info) == []


def test_prompts():
    assert prompt_for("Email", first=True).startswith("Hi!")
    assert "phone number" in prompt_for("Phone")
    assert "Phone: Complete" in completion_message()


class TestCollectName:
    def test_valid_name_is_trimmed(self):
        reply = collect_field("Name", "  Sanket   Trivedi ")

        assert reply.valid
        assert reply.value == "Sanket Trivedi"
        assert '"Sanket Trivedi"' in reply.message

    @pytest.mark.parametrize(
        "answer, hint",
        [
            ("J", "longer name"),
            ("J0hn Doe", "only letters"),
            ("Sanket", "first and last name"),
            ("Software Engineer", "valid full name"),
        ],
    )
    def test_invalid_name_hints(self, answer, hint):
        reply = collect_field("Name", answer)

        assert not reply.valid
        assert reply.value is None
        assert hint in reply.message


class TestCollectEmail:
    def test_valid_email_is_lowercased(self):
        reply = collect_field("Email", "Jane.Roe@Corp.IO")

        assert reply.valid
        assert reply.value == "jane.roe@corp.io"

    @pytest.mark.parametrize(
        "answer, hint",
        [
            ("jane.corp.io", "@ symbol"),
            ("jane@corpio", "domain with a dot"),
            ("jane@example.com", "real email address"),
            ("jane@@corp.io", "valid email address"),
        ],
    )
    def test_invalid_email_hints(self, answer, hint):
        reply = collect_field("Email", answer)

        assert not reply.valid
        assert hint in reply.message


class TestCollectPhone:
    def test_valid_phone_is_formatted(self):
        reply = collect_field("Phone", "212.555.7890")

        assert reply.valid
        assert reply.value == "(212) 555-7890"

    @pytest.mark.parametrize(
        "answer, hint",
        [
            ("555-1234", "at least 10 digits"),
            ("1234567890123456", "maximum 15 digits"),
            ("0123456789", "valid phone number"),
        ],
    )
    def test_invalid_phone_hints(self, answer, hint):
        reply = collect_field("Phone", answer)

        assert not reply.valid
        assert hint in reply.message


def test_unknown_field():
    with pytest.raises(ValueError, match="Unknown field"):
        collect_field("Address", "1 Main St")
