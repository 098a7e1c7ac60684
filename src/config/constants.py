"""
Constants used across the cleaning pipeline.
Versioned and pinned for determinism.

Thresholds are empirically tuned; change them only together with a
MARKERS_VERSION bump.
"""
from typing import List, Tuple

CLEANER_VERSION: str = "email-cleaner-2.4.0"
MARKERS_VERSION: str = "markers-2025.3"

# =============================================================================
# Forwarded wrapper
# =============================================================================
FORWARDED_MARKERS: List[str] = [
    "---------- Forwarded message ---------",
    "---------- Forwarded message ----------",
    "----- Forwarded message -----",
    "----- Forwarded Message -----",
    "--- Original Message ---",
    "----- Original Message -----",
    "-------- Original Message --------",
    "Begin forwarded message:",
]

FORWARD_HEADER_SCAN_LINES: int = 12
BARE_HEADER_SCAN_LINES: int = 15

# =============================================================================
# Calendar invites
# =============================================================================
CALENDAR_MARKERS: List[str] = [
    "invitation from google calendar",
    "join with google meet",
    "join google meet",
    "more details »",
    "this event has been updated",
    "this event has been changed",
    "this event has been cancelled",
    "view all guest info",
    "going (yes",
    "going? yes",
    "microsoft teams meeting",
    "join on your computer",
    "learn more about google calendar",
    "you are receiving this email because you are an attendee",
    "forwarding this invitation could allow",
    "invitation from outlook",
]

CALENDAR_METADATA_LABELS: List[str] = [
    "When",
    "Where",
    "Guests",
    "Calendar",
    "Who",
    "Video call",
    "Joining info",
    "Organizer",
]

CALENDAR_URL_HOSTS: List[str] = [
    "calendar.google.com",
    "meet.google.com",
    "www.google.com/calendar",
    "teams.microsoft.com",
    "zoom.us",
]

CALENDAR_SKIP_BLANK_LINES: int = 2
CALENDAR_CONTENT_MIN_LINE: int = 20

# =============================================================================
# Inline quotes
# =============================================================================
QUOTE_HEADER_MIN_PREFIX: int = 50
QUOTE_WROTE_MIN_PREFIX: int = 30
QUOTE_WROTE_MIN_RATIO: float = 0.15

# =============================================================================
# Disclaimers
# =============================================================================
DISCLAIMER_MARKERS: List[str] = [
    "DISCLAIMER:",
    "DISCLAIMER",
    "CONFIDENTIALITY NOTICE",
    "CONFIDENTIALITY NOTICE:",
    "CONFIDENTIALITY NOTE",
    "CONFIDENTIALITY NOTE:",
    "CONFIDENTIALITY:",
    "This email and any attachments",
    "This email and any files transmitted",
    "If you are not the intended recipient",
    "This message is intended only",
    "This communication is confidential",
    "This e-mail is confidential",
    "The information contained in this email",
    "NOTICE: This email is intended for",
    "________________________________",
    "This message contains confidential",
    "The contents of this email",
    "IMPORTANT NOTICE:",
    "LEGAL NOTICE:",
]

DISCLAIMER_MIN_OFFSET: int = 30

# Short texts scale absolute minimum offsets down to this fraction of length.
SHORT_TEXT_OFFSET_RATIO: float = 0.3

# =============================================================================
# Signatures
# =============================================================================
SIGNATURE_INTRO_PHRASES: List[str] = [
    "Sent from my iPhone",
    "Sent from my iPad",
    "Sent from my Android",
    "Sent from my Galaxy",
    "Sent from my BlackBerry",
    "Sent from Outlook",
    "Get Outlook for",
    "Sent from Mail for",
    "Sent from Yahoo Mail",
    "Sent via Superhuman",
    "Sent with Spark",
]

SIGN_OFF_WORDS: List[str] = [
    "Best regards",
    "Kind regards",
    "Warm regards",
    "Best wishes",
    "All the best",
    "Many thanks",
    "Thank you",
    "Talk soon",
    "Take care",
    "Sincerely",
    "Regards",
    "Cheers",
    "Thanks",
    "Warmly",
    "Best",
    "Yours",
]

SHORT_EMAIL_CHARS: int = 500

SIGNATURE_DELIMITER_MIN_OFFSET: int = 50
SIGNATURE_INTRO_RATIO_SHORT: float = 0.10
SIGNATURE_INTRO_RATIO_LONG: float = 0.25
SIGNATURE_SENDER_MIN_OFFSET: int = 15
SIGNATURE_PHONE_LOOKBACK: int = 4
SIGNATURE_PHONE_MIN_OFFSET: int = 25
SIGNATURE_PIPE_MIN_OFFSET_SHORT: int = 15
SIGNATURE_PIPE_MIN_OFFSET_LONG: int = 40
SIGNATURE_MAILTO_LOOKBACK: int = 6
SIGNATURE_MAILTO_MIN_OFFSET: int = 15
SIGNATURE_TAGLINE_MIN_CHARS: int = 10
SIGNATURE_TAGLINE_LOOKBACK: int = 7
SIGNATURE_TAGLINE_MIN_OFFSET: int = 15
SIGNATURE_TAIL_LINES_SHORT: int = 18
SIGNATURE_TAIL_LINES_LONG: int = 12
SIGNATURE_TAIL_RATIO_SHORT: float = 0.15
SIGNATURE_TAIL_RATIO_LONG: float = 0.40
SIGNATURE_WALKUP_MAX_LINES: int = 5
SIGNATURE_SHORT_LINE_CHARS: int = 60

# The orchestrator keeps the signature stage only above this removed fraction.
SIGNATURE_MIN_REMOVED_RATIO: float = 0.15

# =============================================================================
# Sign-off truncation
# =============================================================================
SIGNOFF_MIN_OFFSET: int = 50
SIGNOFF_TRAILER_MAX_CHARS: int = 200

# =============================================================================
# HTML
# =============================================================================
HTML_CALENDAR_MIN_RETAINED: float = 0.10
HTML_DISCLAIMER_MIN_POSITION: float = 0.20
HTML_DISCLAIMER_MIN_RETAINED: float = 0.20

# =============================================================================
# Orchestrator safety net
# =============================================================================
SAFETY_NET_MIN_RATIO: float = 0.15
SAFETY_NET_MIN_ORIGINAL_CHARS: int = 100
TRAILING_UNDERSCORE_RUN: int = 10

# =============================================================================
# Thread parsing
# =============================================================================
THREAD_MAX_BLOCK_LENGTH: int = 1500
THREAD_MAX_LENGTH: int = 6000
THREAD_MAX_MESSAGES: int = 5

# =============================================================================
# Brief extraction
# =============================================================================
SNIPPET_LENGTH: int = 280
SUMMARY_LENGTH: int = 120
MAX_CLEANED_LENGTH: int = 4000
SUBJECT_PREFIXES: Tuple[str, ...] = ("re", "fwd", "fw", "aw", "sv", "vs")
