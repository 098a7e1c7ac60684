"""
Unit tests for src.cleaning.calendar.
"""
from src.cleaning.calendar import has_calendar_signal, is_calendar_line, strip_calendar_content


class TestStripCalendarContent:
    def test_removes_invite_and_keeps_paragraph(self, calendar_text):
        result = strip_calendar_content(calendar_text)
        assert result == (
            "Let's sync on the roadmap next week.\n\n"
            "Looking forward to discussing the Q3 plans with everyone."
        )
        assert "calendar.google.com" not in result
        assert "Invitation" not in result

    def test_metadata_labels_and_short_values_dropped(self):
        text = (
            "Notes below.\n"
            "\n"
            "This event has been updated\n"
            "When\n"
            "Tue Mar 4, 2025 10am\n"
            "Guests\n"
            "alice@x.com\n"
            "\n"
            "Please review the attached agenda before the meeting."
        )
        result = strip_calendar_content(text)
        assert result == "Notes below.\n\nPlease review the attached agenda before the meeting."

    def test_no_signal_returns_same_object(self, plain_text):
        assert strip_calendar_content(plain_text) is plain_text

    def test_reply_for_in_a_sentence_is_content(self):
        text = (
            "Hi Sam,\n"
            "Thanks for the quick reply for the pricing question yesterday afternoon.\n"
            "I will send the contract today."
        )
        assert strip_calendar_content(text) is text

    def test_empty(self):
        assert strip_calendar_content("") == ""


class TestCalendarClassifiers:
    def test_signal_detection(self, calendar_text, plain_text):
        assert has_calendar_signal(calendar_text)
        assert not has_calendar_signal(plain_text)

    def test_marker_line(self):
        assert is_calendar_line("Join with Google Meet")

    def test_url_line(self):
        assert is_calendar_line("https://meet.google.com/abc-defg-hij")

    def test_metadata_label(self):
        assert is_calendar_line("Where: Room 4")
        assert is_calendar_line("Guests")

    def test_label_prefix_of_word_is_content(self):
        assert not is_calendar_line("Whenever you get a chance")

    def test_blank_line(self):
        assert not is_calendar_line("")

    def test_google_reply_for_line(self):
        assert is_calendar_line("Reply for jane@example.com")
        assert not is_calendar_line("Thanks for the reply for the budget, all fine.")
