"""
Shared test fixtures for the email cleaning test suite.
"""
import pytest

from src.models.pipeline_version import PipelineVersion
from src.models.raw_email import RawEmail


# ==========================================================================
# Pipeline Version
# ==========================================================================

@pytest.fixture
def pipeline_version():
    return PipelineVersion(
        cleanerversion="email-cleaner-test",
        markersversion="markers-test",
    )


# ==========================================================================
# Plain-text bodies
# ==========================================================================

@pytest.fixture
def forwarded_text():
    return (
        "---------- Forwarded message ---------\n"
        "From: Jane Doe <jane@x.com>\n"
        "Subject: Hi\n"
        "Date: Mon\n"
        "\n"
        "Body text"
    )


@pytest.fixture
def disclaimer_text():
    return "Hello there, thanks.\n\nCONFIDENTIALITY NOTICE: blah blah"


@pytest.fixture
def delimiter_text():
    return "Hi,\nLet's meet Friday.\n\n--\nJohn Smith\nCEO"


@pytest.fixture
def calendar_text():
    return (
        "Let's sync on the roadmap next week.\n"
        "\n"
        "Invitation from Google Calendar\n"
        "Going? Yes<https://calendar.google.com/calendar/event?action=RESPOND&rst=1> "
        "No<https://calendar.google.com/calendar/event?action=RESPOND&rst=2> "
        "Maybe<https://calendar.google.com/calendar/event?action=RESPOND&rst=3>\n"
        "\n"
        "Looking forward to discussing the Q3 plans with everyone."
    )


@pytest.fixture
def over_stripped_text():
    """Forward whose original body is tiny compared to the forwarder's note."""
    return (
        "Please see below, this is the contract thread we discussed during the weekly sync.\n"
        "\n"
        "---------- Forwarded message ---------\n"
        "From: Jane Doe <jane@x.com>\n"
        "Subject: Contract\n"
        "Date: Mon\n"
        "\n"
        "Ok."
    )


@pytest.fixture
def plain_text():
    return "Just confirming that we are still on for lunch on Thursday at noon."


# ==========================================================================
# HTML bodies
# ==========================================================================

@pytest.fixture
def hostile_html():
    return (
        '<html><head><meta http-equiv="refresh" content="0;url=http://evil.example">'
        "<style>p { color: red; }</style></head>"
        '<body onload="track()">'
        "<p>Hello team</p>"
        "<script>alert('x')</script>"
        '<a href="javascript:alert(1)">click</a>'
        '<img src="pic.png" onerror=alert(1)>'
        '<iframe src="data:text/html;base64,PHNjcmlwdD4="></iframe>'
        '<img src="https://t.example.com/p.gif" height="1" width="1">'
        "</body></html>"
    )


# ==========================================================================
# Raw emails
# ==========================================================================

@pytest.fixture
def raw_emails(forwarded_text, disclaimer_text, plain_text):
    return [
        RawEmail(text_body=forwarded_text, message_id="msg-001", subject="Fwd: Hi"),
        RawEmail(text_body=disclaimer_text, message_id="msg-002", subject="Re: Thanks"),
        RawEmail(text_body=plain_text, message_id="msg-003", subject="Lunch"),
    ]
