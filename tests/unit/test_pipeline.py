"""
Unit tests for src.cleaning.pipeline (orchestrator behavior).
"""
from src.cleaning.pipeline import (
    clean_email_content,
    clean_raw_email,
    normalize_final_text,
    split_content_at_disclaimer,
)
from src.models.cleaning import CleaningStageTag
from src.models.raw_email import RawEmail

BUDGET = "Thanks for sending the revised budget, it looks good to me."


class TestStageTags:
    def test_no_change_no_tags(self, plain_text):
        result = clean_email_content(plain_text)
        assert result.cleaned_text == plain_text
        assert result.cleaning_applied == []
        assert result.cleaned_html is None
        assert not result.was_forwarded

    def test_absent_inputs(self):
        result = clean_email_content()
        assert result.cleaned_text == ""
        assert result.cleaned_html is None
        assert result.cleaning_applied == []

    def test_html_sanitized_tag(self):
        result = clean_email_content("Hello", "<p>Hello</p><script>x()</script>")
        assert result.cleaned_html == "<p>Hello</p>"
        assert result.cleaning_applied == [CleaningStageTag.HTML_SANITIZED]

    def test_clean_html_is_still_tagged_sanitized(self):
        result = clean_email_content("Hello", "<p>Hello</p>")
        assert result.cleaned_html == "<p>Hello</p>"
        assert result.cleaning_applied == [CleaningStageTag.HTML_SANITIZED]

    def test_reply_for_in_prose_is_kept_in_html(self):
        html = (
            "<div>Hello all, the quarterly numbers are in and they look good.</div>"
            "<div>Thanks for the reply for the budget, it all checks out fine.</div>"
        )
        result = clean_email_content(html_body=html)
        assert result.cleaned_html == html
        assert result.cleaning_applied == [CleaningStageTag.HTML_SANITIZED]


class TestSignatureAcceptance:
    def test_small_signature_cut_is_rejected(self):
        body = ("We reviewed the proposal in detail with the finance team this morning. " * 4).strip()
        text = body + "\n\nSent from my iPhone"
        result = clean_email_content(text)
        assert result.cleaned_text == text
        assert not result.has_stage(CleaningStageTag.SIGNATURES)

    def test_signoff_truncation_is_tagged_as_signatures(self):
        text = BUDGET + "\n\nBest,\nJohn\n[https://acme.example.com/logo.png]"
        result = clean_email_content(text)
        assert result.cleaned_text == BUDGET + "\n\nBest,\nJohn"
        assert result.cleaning_applied == [CleaningStageTag.SIGNATURES]

    def test_name_title_block_removed(self):
        text = BUDGET + "\n\nBest,\nJohn\n\nJohn Smith | CEO\nAcme Corp"
        result = clean_email_content(text)
        assert result.cleaned_text == BUDGET + "\n\nBest,\nJohn"
        assert result.cleaning_applied == [CleaningStageTag.SIGNATURES]


class TestSafetyNet:
    def test_fallback_restores_original(self, over_stripped_text):
        result = clean_email_content(over_stripped_text)
        assert result.cleaned_text == over_stripped_text
        assert result.cleaning_applied == [
            CleaningStageTag.FORWARDED_WRAPPER,
            CleaningStageTag.FALLBACK_TOO_AGGRESSIVE,
        ]

    def test_fallback_keeps_forward_metadata(self, over_stripped_text):
        result = clean_email_content(over_stripped_text)
        assert result.was_forwarded
        assert result.original_subject == "Contract"
        assert result.original_sender.email == "jane@x.com"

    def test_fallback_after_html_tags(self, over_stripped_text):
        result = clean_email_content(over_stripped_text, "<p>Ok.</p><script>x()</script>")
        assert result.cleaning_applied == [
            CleaningStageTag.FORWARDED_WRAPPER,
            CleaningStageTag.HTML_SANITIZED,
            CleaningStageTag.FALLBACK_TOO_AGGRESSIVE,
        ]
        assert result.cleaned_html == "<p>Ok.</p>"

    def test_fallback_trims_surrounding_whitespace(self, over_stripped_text):
        result = clean_email_content("\n\n  " + over_stripped_text + "\n\n")
        assert result.cleaned_text == over_stripped_text
        assert result.has_stage(CleaningStageTag.FALLBACK_TOO_AGGRESSIVE)

    def test_empty_result_falls_back(self):
        text = "---------- Forwarded message ---------\nFrom: a@b.com\nSubject: x"
        result = clean_email_content(text)
        assert result.cleaned_text == text
        assert result.has_stage(CleaningStageTag.FALLBACK_TOO_AGGRESSIVE)


class TestFinalNormalization:
    def test_trailing_underscores_removed(self):
        assert normalize_final_text("  Hello there\n\n____________  \n") == "Hello there"

    def test_short_underscore_run_kept(self):
        assert normalize_final_text("Fill in: _____") == "Fill in: _____"


class TestEntryPoints:
    def test_clean_raw_email(self, disclaimer_text):
        raw = RawEmail(text_body=disclaimer_text, html_body=None)
        assert clean_raw_email(raw) == clean_email_content(disclaimer_text)

    def test_split_at_disclaimer(self, disclaimer_text):
        main, remainder = split_content_at_disclaimer(disclaimer_text)
        assert main == "Hello there, thanks."
        assert remainder == "CONFIDENTIALITY NOTICE: blah blah"

    def test_split_without_marker(self, plain_text):
        assert split_content_at_disclaimer(plain_text) == (plain_text, None)
