"""
Unit tests for src.cleaning.quotes.
"""
from src.cleaning.quotes import strip_inline_quotes


class TestWroteAttribution:
    def test_gmail_attribution(self):
        text = (
            "Thanks for the update, I will review the numbers tomorrow.\n"
            "\n"
            "On Mon, Jan 6, 2025 at 10:15 AM Jane Doe <jane@x.com> wrote:\n"
            "> Here are the numbers."
        )
        assert strip_inline_quotes(text) == "Thanks for the update, I will review the numbers tomorrow."

    def test_short_prefix_is_kept(self):
        text = "Sure.\n\nOn Mon, Jan 6, 2025 at 10:15 AM Jane wrote:\n> question"
        assert strip_inline_quotes(text) == text

    def test_numeric_date_attribution(self):
        text = (
            "Works for me, I have booked the room for the afternoon.\n"
            "\n"
            "On 1/6/2025 10:15 AM, Jane Doe wrote:\n"
            "> Can we meet?"
        )
        assert strip_inline_quotes(text) == "Works for me, I have booked the room for the afternoon."


class TestHeaderBlocks:
    def test_outlook_reply_header(self):
        text = (
            "Please find my comments inline below, thanks for waiting.\n"
            "\n"
            "From: Jane Doe\n"
            "Sent: Monday, January 6, 2025 10:15 AM\n"
            "To: Team\n"
            "Subject: Numbers\n"
            "\n"
            "Old body"
        )
        assert strip_inline_quotes(text) == "Please find my comments inline below, thanks for waiting."

    def test_underscore_divider(self):
        text = (
            "Let me know if Thursday still works for the whole team.\n"
            "\n"
            "________________________________\n"
            "From: Jane\n"
            "Sent: Mon\n"
            "To: Team\n"
            "\n"
            "Old"
        )
        assert strip_inline_quotes(text) == "Let me know if Thursday still works for the whole team."

    def test_header_too_close_to_start(self):
        text = "Ok.\n\nFrom: Jane\nSent: Mon\nTo: Team\n\nOld"
        assert strip_inline_quotes(text) == text


class TestNoQuote:
    def test_plain_text_unchanged(self, plain_text):
        assert strip_inline_quotes(plain_text) == plain_text

    def test_empty(self):
        assert strip_inline_quotes("") == ""
