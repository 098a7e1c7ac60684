"""
Unit tests for src.cleaning.validation.
"""
import json

import pytest

from src.cleaning.pipeline import clean_email_content
from src.cleaning.validation import validate_cleaned_email


def _base_dict(**overrides):
    data = {
        "cleaned_text": "Hello there, thanks.",
        "cleaned_html": None,
        "original_sender": None,
        "original_subject": None,
        "original_date": None,
        "was_forwarded": False,
        "cleaning_applied": ["disclaimers"],
    }
    data.update(overrides)
    return data


class TestValidateCleanedEmail:
    def test_valid_result(self, disclaimer_text):
        result = validate_cleaned_email(clean_email_content(disclaimer_text), disclaimer_text)
        assert result.valid
        assert result.errors == []
        assert result.data["cleaned_text"] == "Hello there, thanks."

    def test_json_string_input(self, forwarded_text):
        payload = json.dumps(clean_email_content(forwarded_text).to_dict())
        assert validate_cleaned_email(payload, forwarded_text).valid

    def test_invalid_json(self):
        result = validate_cleaned_email("{not json")
        assert not result.valid
        assert result.errors[0].startswith("Invalid JSON")

    def test_missing_field(self):
        data = _base_dict()
        del data["cleaning_applied"]
        result = validate_cleaned_email(data)
        assert not result.valid
        assert result.errors[0].startswith("Schema violation")

    def test_unknown_tag(self):
        result = validate_cleaned_email(_base_dict(cleaning_applied=["spam_filter"]))
        assert not result.valid

    def test_repeated_tag(self):
        result = validate_cleaned_email(_base_dict(cleaning_applied=["disclaimers", "disclaimers"]))
        assert not result.valid
        assert result.errors[0].startswith("Schema violation")

    def test_out_of_order_tags(self):
        result = validate_cleaned_email(_base_dict(cleaning_applied=["signatures", "disclaimers"]))
        assert not result.valid
        assert "execution order" in result.errors[0]

    def test_over_stripping_without_fallback(self):
        result = validate_cleaned_email(_base_dict(cleaned_text="x"), "y" * 200)
        assert not result.valid
        assert any("without a fallback" in e for e in result.errors)

    def test_fallback_must_restore_original(self):
        data = _base_dict(cleaned_text="abc", cleaning_applied=["fallback_too_aggressive"])
        result = validate_cleaned_email(data, "different original")
        assert not result.valid

    def test_html_tag_without_html(self):
        result = validate_cleaned_email(_base_dict(cleaning_applied=["html_sanitized"]))
        assert not result.valid

    def test_forward_without_sender_is_warning(self):
        result = validate_cleaned_email(_base_dict(was_forwarded=True, cleaning_applied=[]))
        assert result.valid
        assert result.warnings

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            validate_cleaned_email(42)
