"""
Unit tests for src.cleaning.forwarded.
"""
from src.cleaning.forwarded import parse_from_value, strip_forwarded_wrapper


class TestForwardMarker:
    def test_extracts_body_and_metadata(self, forwarded_text):
        result = strip_forwarded_wrapper(forwarded_text)
        assert result.body == "Body text"
        assert result.metadata is not None
        assert result.metadata.from_name == "Jane Doe"
        assert result.metadata.from_email == "jane@x.com"
        assert result.metadata.subject == "Hi"
        assert result.metadata.date == "Mon"

    def test_marker_is_case_insensitive(self):
        text = "begin forwarded message:\n\nFrom: Jane <j@x.com>\nSubject: S\n\nBody"
        result = strip_forwarded_wrapper(text)
        assert result.body == "Body"
        assert result.metadata.from_email == "j@x.com"

    def test_earliest_marker_wins(self):
        text = (
            "Note\n"
            "----- Original Message -----\n"
            "From: a@b.com\n"
            "Subject: First\n"
            "\n"
            "Body one\n"
            "---------- Forwarded message ---------\n"
            "From: c@d.com\n"
            "Subject: Second\n"
            "\n"
            "Body two"
        )
        result = strip_forwarded_wrapper(text)
        assert result.metadata.subject == "First"
        assert result.metadata.from_email == "a@b.com"
        assert result.metadata.from_name is None
        assert result.body.startswith("Body one")

    def test_marker_without_headers_has_no_metadata(self):
        text = "---------- Forwarded message ---------\nSome note\nMore"
        result = strip_forwarded_wrapper(text)
        assert result.metadata is None
        assert result.body == "Some note\nMore"

    def test_no_marker_returns_input(self, plain_text):
        result = strip_forwarded_wrapper(plain_text)
        assert result.body == plain_text
        assert result.metadata is None

    def test_empty_text(self):
        result = strip_forwarded_wrapper("")
        assert result.body == ""
        assert result.metadata is None


class TestBareHeaderBlock:
    def test_header_block_at_top(self):
        text = "From: Jane <jane@x.com>\nSubject: Update\nDate: Tue\n\nHello team"
        result = strip_forwarded_wrapper(text)
        assert result.body == "Hello team"
        assert result.metadata.from_name == "Jane"
        assert result.metadata.subject == "Update"

    def test_requires_subject(self):
        text = "From: Jane\n\nHello"
        result = strip_forwarded_wrapper(text)
        assert result.body == text
        assert result.metadata is None

    def test_block_below_a_short_note(self):
        text = "FYI see below\n\nFrom: Jane <jane@x.com>\nSubject: Update\n\nHello team"
        result = strip_forwarded_wrapper(text)
        assert result.body == "Hello team"
        assert result.metadata.from_email == "jane@x.com"
        assert result.metadata.subject == "Update"

    def test_block_past_scan_window_is_ignored(self):
        text = "line\n" * 15 + "From: x\nSubject: y\n\nBody"
        result = strip_forwarded_wrapper(text)
        assert result.body == text
        assert result.metadata is None


class TestParseFromValue:
    def test_name_and_email(self):
        assert parse_from_value("Jane Doe <jane@x.com>") == ("Jane Doe", "jane@x.com")

    def test_quoted_name(self):
        assert parse_from_value('"Doe, Jane" <jane@x.com>') == ("Doe, Jane", "jane@x.com")

    def test_bracketed_email_only(self):
        assert parse_from_value("<jane@x.com>") == (None, "jane@x.com")

    def test_bare_email(self):
        assert parse_from_value("jane@x.com") == (None, "jane@x.com")

    def test_bare_name(self):
        assert parse_from_value("Jane Doe") == ("Jane Doe", None)

    def test_empty(self):
        assert parse_from_value(None) == (None, None)
        assert parse_from_value("") == (None, None)
