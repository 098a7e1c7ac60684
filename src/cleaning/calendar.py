"""
Calendar Content Stripping — removes invite boilerplate and RSVP lines.

Google Calendar / Teams invites pasted or forwarded as plain text carry a
block of event metadata, join links and RSVP links. The block is removed
line by line so real content that follows the invite survives.
"""
import logging
import re
from typing import List

from src.cleaning.text_utils import collapse_blank_lines
from src.config.constants import (
    CALENDAR_CONTENT_MIN_LINE,
    CALENDAR_MARKERS,
    CALENDAR_METADATA_LABELS,
    CALENDAR_SKIP_BLANK_LINES,
    CALENDAR_URL_HOSTS,
)

logger = logging.getLogger(__name__)

RSVP_RE = re.compile(
    r"\b(?:Yes|No|Maybe)\s*<https?://[^>\s]+>"
    r"|going(?:\s*\([^)\n]*\))?\??\s*yes\s*-\s*no\s*-\s*maybe"
    # Google's per-guest RSVP line: "Reply for jane@example.com"
    r"|^\s*reply\s+for\s+\S+@\S+",
    re.IGNORECASE | re.MULTILINE,
)

METADATA_LABEL_RE = re.compile(
    r"^(?:" + "|".join(re.escape(label) for label in CALENDAR_METADATA_LABELS) + r")\s*(?::|$)",
    re.IGNORECASE,
)

CALENDAR_URL_RE = re.compile(
    r"https?://(?:[\w-]+\.)*(?:" + "|".join(re.escape(host) for host in CALENDAR_URL_HOSTS) + r")",
    re.IGNORECASE,
)

RESIDUAL_FRAGMENT_RE = re.compile(
    r"going(?:\s*\([^)\n]*\))?\??\s*yes\s*-\s*no\s*-\s*maybe"
    r"|more details\s*»(?:\s*<[^>\n]*>)?",
    re.IGNORECASE,
)


def has_calendar_signal(text: str) -> bool:
    """Fast check: any calendar marker phrase or RSVP pattern present."""
    lower = text.lower()
    if any(marker in lower for marker in CALENDAR_MARKERS):
        return True
    return RSVP_RE.search(text) is not None


def is_calendar_line(line: str) -> bool:
    """Classify one stripped line as invite boilerplate."""
    if not line:
        return False
    lower = line.lower()
    if any(marker in lower for marker in CALENDAR_MARKERS):
        return True
    if RSVP_RE.search(line):
        return True
    if METADATA_LABEL_RE.match(line):
        return True
    return CALENDAR_URL_RE.search(line) is not None


def strip_calendar_content(text: str) -> str:
    """
    Remove calendar-invite blocks and RSVP lines.

    Args:
        text: Plain-text email body.

    Returns:
        Text without calendar boilerplate; the input object itself when no
        calendar signal is present or nothing was removed.
    """
    if not text or not has_calendar_signal(text):
        return text

    kept: List[str] = []
    in_calendar_block = False
    skip_blank_budget = 0
    removed = 0

    for line in text.split("\n"):
        stripped = line.strip()

        if is_calendar_line(stripped):
            in_calendar_block = True
            skip_blank_budget = CALENDAR_SKIP_BLANK_LINES
            removed += 1
            continue

        if stripped == "":
            if skip_blank_budget > 0:
                skip_blank_budget -= 1
                continue
            kept.append(line)
            continue

        if in_calendar_block:
            if len(stripped) > CALENDAR_CONTENT_MIN_LINE:
                in_calendar_block = False
                skip_blank_budget = 0
                kept.append(line)
            else:
                removed += 1
            continue

        skip_blank_budget = 0
        kept.append(line)

    result = RESIDUAL_FRAGMENT_RE.sub("", "\n".join(kept))
    if removed == 0 and result == text:
        return text

    result = collapse_blank_lines(result).strip()
    logger.debug("Calendar stripping removed %d lines", removed)
    return result
