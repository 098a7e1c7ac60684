"""
Brief Extractor — compact display view of an email.

Builds on clean_email_content and adds:
- HTML-to-text conversion when no plain-text body exists
- CID / inline image reference removal
- Whitespace normalization and a word-boundary length cap
- Snippet, one-sentence summary and canonical display subject
"""
import logging
import re
from typing import Optional

from bs4 import BeautifulSoup

from src.cleaning.pipeline import clean_email_content
from src.config.constants import (
    MAX_CLEANED_LENGTH,
    SNIPPET_LENGTH,
    SUBJECT_PREFIXES,
    SUMMARY_LENGTH,
)
from src.config.settings import MAX_BODY_LOG_CHARS
from src.models.brief import BriefSignals, EmailBrief
from src.models.cleaning import CleaningStageTag
from src.models.raw_email import RawEmail

logger = logging.getLogger(__name__)

# ======================================================================
# HTML to text
# ======================================================================
HTML_DROP_TAGS = ["script", "style", "head", "meta"]
HTML_BLOCK_TAGS = ["p", "div", "li", "tr", "h1", "h2", "h3", "h4", "h5", "h6"]

CID_REFERENCE_RE = re.compile(r"\[cid:[^\]]+\]|\[image:[^\]]+\]|<cid:[^>]+>", re.IGNORECASE)

SUBJECT_PREFIX_RE = re.compile(
    r"^\s*(?:" + "|".join(SUBJECT_PREFIXES) + r"):\s*",
    re.IGNORECASE,
)
SUBJECT_MIN_LENGTH = 3

GREETING_PATTERNS = [
    re.compile(r"^(?:hi|hey|hello|dear|good\s+(?:morning|afternoon|evening)),?\s*[a-z]*,?\s*", re.IGNORECASE),
    re.compile(r"^hope\s+(?:this|you).{0,50}\.?\s*", re.IGNORECASE),
    re.compile(r"^thanks?\s+for.{0,50}\.?\s*", re.IGNORECASE),
]
SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")
BARE_NAME_RE = re.compile(r"^[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?$")
SUMMARY_MIN_SENTENCE = 20

CAP_BREAK_MIN_RATIO = 0.8
SUMMARY_BREAK_MIN_RATIO = 0.7


def html_to_text(html_body: Optional[str]) -> str:
    """Convert an HTML body to plain text with block elements as line breaks."""
    if not html_body:
        return ""
    soup = BeautifulSoup(html_body, "html.parser")
    for tag in soup(HTML_DROP_TAGS):
        tag.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(HTML_BLOCK_TAGS):
        block.append("\n\n" if block.name == "p" else "\n")

    # The parser already decoded entities; "&amp;lt;" stays as the text "&lt;".
    text = soup.get_text().replace("\xa0", " ")
    return re.sub(r"[ \t]+", " ", text).strip()


def canonicalize_subject(subject: Optional[str]) -> str:
    """Strip repeated Re:/Fwd:/FW:/AW:/SV:/VS: prefixes; keep the original if too little remains."""
    original = subject or ""
    result = original
    previous = None
    while result != previous:
        previous = result
        result = SUBJECT_PREFIX_RE.sub("", result).strip()

    if len(result) < SUBJECT_MIN_LENGTH:
        return original.strip()
    return result


def strip_cid_references(text: str) -> str:
    return CID_REFERENCE_RE.sub("", text)


def normalize_whitespace(text: str) -> str:
    text = text.replace("\r\n", "\n")
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = re.sub(r"[ \t]+", " ", text)
    return "\n".join(line.strip() for line in text.split("\n")).strip()


def cap_length(text: str, max_length: int = MAX_CLEANED_LENGTH) -> str:
    """Cap *text* at *max_length*, preferring the last space near the limit."""
    if len(text) <= max_length:
        return text
    last_space = text.rfind(" ", 0, max_length + 1)
    if last_space > max_length * CAP_BREAK_MIN_RATIO:
        return text[:last_space].strip()
    return text[:max_length].strip()


def generate_summary(text: str) -> str:
    """
    Produce a ~120 character one-sentence summary.

    Greetings are dropped, the first sentence of at least 20 chars that is
    not a bare name is taken, and an ellipsis marks a mid-sentence cut.
    """
    if not text or not text.strip():
        return ""

    content = text.strip()
    for pattern in GREETING_PATTERNS:
        content = pattern.sub("", content, count=1).strip()

    summary = ""
    for sentence in SENTENCE_SPLIT_RE.split(content):
        candidate = sentence.strip()
        if len(candidate) >= SUMMARY_MIN_SENTENCE and not BARE_NAME_RE.match(candidate):
            summary = candidate
            break

    if not summary:
        summary = content

    if len(summary) > SUMMARY_LENGTH:
        last_space = summary.rfind(" ", 0, SUMMARY_LENGTH + 1)
        if last_space > SUMMARY_LENGTH * SUMMARY_BREAK_MIN_RATIO:
            summary = summary[:last_space].strip()
        else:
            summary = summary[:SUMMARY_LENGTH].strip()
        if not summary.endswith((".", "!", "?")):
            summary += "…"

    return summary


def extract_brief(
    raw: RawEmail,
    subject: Optional[str] = None,
    from_email: Optional[str] = None,
    from_name: Optional[str] = None,
) -> EmailBrief:
    """
    Build the display brief for one email.

    Args:
        raw: Email bodies; the HTML body is converted only when the text body is empty.
        subject: Envelope subject, defaults to raw.subject.
        from_email: Envelope sender address.
        from_name: Envelope sender display name.

    Returns:
        EmailBrief. For forwarded mail the display sender and subject come
        from the forwarded header block.
    """
    if not isinstance(raw, RawEmail):
        raise TypeError(f"extract_brief expects a RawEmail, got {type(raw).__name__}")

    text = raw.text_body or html_to_text(raw.html_body)
    cleaned = clean_email_content(text, None, raw.sender_display_name or from_name)

    body = strip_cid_references(cleaned.cleaned_text)
    body = cap_length(normalize_whitespace(body))

    signals = BriefSignals(
        is_forwarded=cleaned.was_forwarded,
        has_thread=cleaned.has_stage(CleaningStageTag.INLINE_QUOTES),
        has_disclaimer=cleaned.has_stage(CleaningStageTag.DISCLAIMERS),
        has_calendar=cleaned.has_stage(CleaningStageTag.CALENDAR_CONTENT),
    )

    if cleaned.was_forwarded:
        sender = cleaned.original_sender
        display_from_email = sender.email if sender else None
        display_from_name = sender.name if sender else None
    else:
        display_from_email = from_email
        display_from_name = from_name

    brief = EmailBrief(
        cleaned_text=body,
        snippet=body[:SNIPPET_LENGTH].strip(),
        summary=generate_summary(body),
        display_subject=canonicalize_subject(cleaned.original_subject or subject or raw.subject),
        display_from_email=display_from_email,
        display_from_name=display_from_name,
        signals=signals,
    )
    logger.debug("Brief for %s: %s", raw.message_id or "<no id>", brief.summary[:MAX_BODY_LOG_CHARS])
    return brief
