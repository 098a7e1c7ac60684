"""
Inline Quote Stripping — truncates trailing quoted-reply chains.

Rules are evaluated in priority order; the first rule whose match passes
its length guard wins:
    1. Underscore divider followed by an Outlook header block
    2. Outlook reply header block (From / Sent / To)
    3. "On <date>, <person> wrote:" attributions
"""
import logging
import re
from typing import List, Optional, Pattern

from src.config.constants import (
    QUOTE_HEADER_MIN_PREFIX,
    QUOTE_WROTE_MIN_PREFIX,
    QUOTE_WROTE_MIN_RATIO,
)

logger = logging.getLogger(__name__)

DIVIDER_HEADER_RE = re.compile(
    r"^[ \t]*_{20,}[ \t]*\r?\n[ \t]*(?:From|Sent|To|Subject):",
    re.IGNORECASE | re.MULTILINE,
)

REPLY_HEADER_RE = re.compile(
    r"^[ \t]*From:[^\n]*\n[ \t]*Sent:[^\n]*\n[ \t]*To:",
    re.IGNORECASE | re.MULTILINE,
)

# Most specific first; the generic attribution is the last resort.
WROTE_PATTERNS: List[Pattern[str]] = [
    # On Mon, Jan 6, 2025 at 10:15 AM Jane Doe <jane@x.com> wrote:
    re.compile(
        r"^[ \t]*On \w{3,9},? \w{3,9}\.? \d{1,2},? \d{4},? at \d{1,2}:\d{2}(?:\s?[AaPp][Mm])?,?"
        r"[^\n]{0,120}?(?:\n[^\n]{0,80}?)?\s*wrote:",
        re.MULTILINE,
    ),
    # On 1/6/2025 10:15 AM, Jane Doe wrote:
    re.compile(r"^[ \t]*On \d{1,2}/\d{1,2}/\d{2,4}[^\n]{0,80}?wrote:", re.MULTILINE),
    # On Mon, 6 Jan 2025, Jane Doe <jane@x.com> wrote:
    re.compile(r"^[ \t]*On [^\n]{10,60}, [^\n]{3,40} <[^>\n]+@[^>\n]+> wrote:", re.MULTILINE),
    # On Monday at 10:15, Jane wrote:
    re.compile(r"^[ \t]*On [^\n]{10,60} at [^\n]{5,20}, [^\n]+? wrote:", re.MULTILINE),
    # 06/01/2025 10:15, Jane Doe <jane@x.com> wrote:
    re.compile(r"^[ \t]*\d{1,2}/\d{1,2}/\d{2,4}[^\n]{1,40}<[^>\n]+@[^>\n]+>[^\n]{0,10}wrote:", re.MULTILINE),
    # Generic, attribution possibly wrapped onto a second line.
    re.compile(r"^[ \t]*On [^\n]{10,120}(?:\n[^\n]{0,80}?)?\s*wrote:[ \t]*$", re.MULTILINE),
]


def strip_inline_quotes(text: str) -> str:
    """
    Truncate the text at the start of a trailing quoted reply.

    Args:
        text: Plain-text email body.

    Returns:
        The retained prefix (trimmed), or the input unchanged when no rule
        qualifies.
    """
    if not text:
        return text

    cut = _find_header_cut(DIVIDER_HEADER_RE, text)
    if cut is None:
        cut = _find_header_cut(REPLY_HEADER_RE, text)
    if cut is None:
        cut = _find_wrote_cut(text)

    if cut is None:
        return text

    logger.debug("Inline quote cut at offset %d of %d", cut, len(text))
    return text[:cut].strip()


def _find_header_cut(pattern: Pattern[str], text: str) -> Optional[int]:
    for match in pattern.finditer(text):
        if match.start() > QUOTE_HEADER_MIN_PREFIX:
            return match.start()
    return None


def _find_wrote_cut(text: str) -> Optional[int]:
    total = len(text)
    for pattern in WROTE_PATTERNS:
        match = pattern.search(text)
        if match is None:
            continue
        prefix_len = match.start()
        if prefix_len > QUOTE_WROTE_MIN_PREFIX and prefix_len > total * QUOTE_WROTE_MIN_RATIO:
            return prefix_len
    return None
