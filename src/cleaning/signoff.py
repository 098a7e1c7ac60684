"""
Sign-off Truncation — final text pass.

Keeps a short "Best,\\nName" sign-off and drops whatever junk follows it
(signature remnants, quoted replies, long trailers).
"""
import logging
import re

from src.config.constants import SIGN_OFF_WORDS, SIGNOFF_MIN_OFFSET, SIGNOFF_TRAILER_MAX_CHARS

logger = logging.getLogger(__name__)

SIGNOFF_BLOCK_RE = re.compile(
    r"\n[ \t]*\n[ \t]*"
    r"(?i:" + "|".join(re.escape(word) for word in SIGN_OFF_WORDS) + r")"
    r"[ \t]*[,!.]?[ \t]*\r?\n"
    r"[ \t]*[A-Z][a-z'’-]+(?:[ \t]+[A-Z][a-z'’-]+)?[ \t]*\r?\n"
)

TRAILER_NAME_PIPE_RE = re.compile(r"^[ \t]*[A-Z][A-Za-z'’.-]+(?:[ \t]+[A-Z][A-Za-z'’.-]*){0,3}[ \t]*\|", re.MULTILINE)
TRAILER_PHONE_RE = re.compile(
    r"^[ \t]*(?:(?i:tel|phone|mobile|cell|office|direct|fax)|[CMTPOD])[ \t]*[:.][ \t]*\+?\(?\d",
    re.MULTILINE,
)
TRAILER_FROM_RE = re.compile(r"^[ \t]*From:", re.IGNORECASE | re.MULTILINE)
BLANK_LINE_RE = re.compile(r"\n[ \t]*\n")


def is_junk_trailer(trailer: str) -> bool:
    """Classify the text following a sign-off block."""
    head = trailer.lstrip()
    if head.startswith(("--", "[http", "On ")):
        return True
    # The name line's newline is consumed by the block match.
    if BLANK_LINE_RE.search("\n" + trailer):
        return True
    if TRAILER_NAME_PIPE_RE.search(trailer):
        return True
    if TRAILER_PHONE_RE.search(trailer):
        return True
    if TRAILER_FROM_RE.search(trailer):
        return True
    return len(trailer) > SIGNOFF_TRAILER_MAX_CHARS


def truncate_after_signoff(text: str) -> str:
    """
    Truncate junk following a short sign-off and name.

    Args:
        text: Plain-text email body.

    Returns:
        Text ending with the sign-off block, or the input unchanged.
    """
    if not text:
        return text

    for match in SIGNOFF_BLOCK_RE.finditer(text):
        if match.start() <= SIGNOFF_MIN_OFFSET:
            continue

        trailer = text[match.end():]
        if not trailer.strip():
            return text
        if not is_junk_trailer(trailer):
            return text

        logger.debug("Sign-off at offset %d, dropping %d trailing chars", match.start(), len(trailer))
        return text[:match.end()].rstrip()

    return text
