"""
Cleaning Orchestrator — main entry point for email content normalization.

Executes the fixed stage sequence:
    1. Forwarded wrapper extraction
    2. Calendar content stripping
    3. Inline quote stripping
    4. Disclaimer stripping
    5. Signature stripping (kept only if it removed enough)
    6. Sign-off truncation
    7. HTML sanitization          (HTML bodies only)
    8. HTML content cleaning      (HTML bodies only)

then applies the global safety net against over-stripping.
"""
import logging
import re
from typing import List, Optional, Tuple

from src.cleaning.calendar import strip_calendar_content
from src.cleaning.disclaimers import strip_disclaimers
from src.cleaning.forwarded import strip_forwarded_wrapper
from src.cleaning.html import clean_html_content, sanitize_html
from src.cleaning.metrics import (
    record_fallback,
    record_retention,
    record_stage_applied,
    timed_stage,
)
from src.cleaning.quotes import strip_inline_quotes
from src.cleaning.signatures import strip_signatures
from src.cleaning.signoff import truncate_after_signoff
from src.config.constants import (
    SAFETY_NET_MIN_ORIGINAL_CHARS,
    SAFETY_NET_MIN_RATIO,
    SIGNATURE_MIN_REMOVED_RATIO,
    TRAILING_UNDERSCORE_RUN,
)
from src.models.cleaning import CleanedEmail, CleaningStageTag, OriginalSender
from src.models.raw_email import RawEmail

logger = logging.getLogger(__name__)

TRAILING_UNDERSCORES_RE = re.compile(r"\s*_{%d,}\s*$" % TRAILING_UNDERSCORE_RUN)

# Tags that mean the main text was split off from trailing material.
SPLIT_TAGS = (
    CleaningStageTag.DISCLAIMERS,
    CleaningStageTag.FORWARDED_WRAPPER,
    CleaningStageTag.SIGNATURES,
)


def clean_email_content(
    text_body: Optional[str] = None,
    html_body: Optional[str] = None,
    sender_display_name: Optional[str] = None,
) -> CleanedEmail:
    """
    Clean a raw email body for display and downstream suggestion logic.

    Absent inputs are treated as empty strings; no input makes this raise.

    Args:
        text_body: Plain-text body.
        html_body: HTML body, sanitized and cleaned when present.
        sender_display_name: Display name of the sender, used by the
            signature stage to spot "<name> | <title>" lines.

    Returns:
        CleanedEmail with the audit trail of stages that changed content.
    """
    with timed_stage("clean_email_content"):
        return _clean(text_body or "", html_body or "", sender_display_name)


def clean_raw_email(raw: RawEmail) -> CleanedEmail:
    return clean_email_content(raw.text_body, raw.html_body, raw.sender_display_name)


def _clean(raw_text: str, raw_html: str, sender_display_name: Optional[str]) -> CleanedEmail:
    applied: List[CleaningStageTag] = []

    # ==================================================================
    # Stage 1: Forwarded wrapper
    # ==================================================================
    forward = strip_forwarded_wrapper(raw_text)
    metadata = forward.metadata
    text = _track(CleaningStageTag.FORWARDED_WRAPPER, raw_text, forward.body, applied)

    # ==================================================================
    # Stages 2-4: Calendar, quotes, disclaimers
    # ==================================================================
    text = _track(CleaningStageTag.CALENDAR_CONTENT, text, strip_calendar_content(text), applied)
    text = _track(CleaningStageTag.INLINE_QUOTES, text, strip_inline_quotes(text), applied)
    text = _track(CleaningStageTag.DISCLAIMERS, text, strip_disclaimers(text), applied)

    # ==================================================================
    # Stage 5: Signatures (conditional accept)
    # ==================================================================
    without_signature = strip_signatures(text, sender_display_name)
    if without_signature != text:
        if len(text) - len(without_signature) > len(text) * SIGNATURE_MIN_REMOVED_RATIO:
            text = _track(CleaningStageTag.SIGNATURES, text, without_signature, applied)
        else:
            logger.debug(
                "Signature cut rejected: removed %d of %d chars",
                len(text) - len(without_signature),
                len(text),
            )

    # ==================================================================
    # Stage 6: Sign-off truncation (recorded as signatures)
    # ==================================================================
    truncated = truncate_after_signoff(text)
    if truncated != text:
        if CleaningStageTag.SIGNATURES not in applied:
            applied.append(CleaningStageTag.SIGNATURES)
        text = truncated

    text = normalize_final_text(text)

    # ==================================================================
    # Stages 7-8: HTML
    # ==================================================================
    cleaned_html: Optional[str] = None
    if raw_html:
        sanitized = sanitize_html(raw_html)
        applied.append(CleaningStageTag.HTML_SANITIZED)
        html_result = clean_html_content(sanitized, text)
        if html_result.was_modified:
            applied.append(CleaningStageTag.HTML_DISCLAIMERS)
        cleaned_html = html_result.html

    # ==================================================================
    # Safety net
    # ==================================================================
    if _stripped_too_much(raw_text, text):
        logger.warning(
            "Cleaning kept %d of %d chars, restoring original text body",
            len(text),
            len(raw_text),
        )
        text = raw_text.strip()
        applied.append(CleaningStageTag.FALLBACK_TOO_AGGRESSIVE)
        record_fallback()

    record_stage_applied(tag.value for tag in applied)
    record_retention(len(raw_text), len(text))

    return CleanedEmail(
        cleaned_text=text,
        cleaned_html=cleaned_html,
        original_sender=(
            OriginalSender(name=metadata.from_name, email=metadata.from_email) if metadata else None
        ),
        original_subject=metadata.subject if metadata else None,
        original_date=metadata.date if metadata else None,
        was_forwarded=metadata is not None,
        cleaning_applied=applied,
    )


def _track(
    tag: CleaningStageTag,
    before: str,
    after: str,
    applied: List[CleaningStageTag],
) -> str:
    if after != before:
        applied.append(tag)
        logger.debug("Stage %s: %d -> %d chars", tag.value, len(before), len(after))
    return after


def _stripped_too_much(raw_text: str, cleaned: str) -> bool:
    original_length = len(raw_text)
    if original_length > SAFETY_NET_MIN_ORIGINAL_CHARS and len(cleaned) < original_length * SAFETY_NET_MIN_RATIO:
        return True
    # Never hand back an empty body for a message that had content.
    return not cleaned and bool(raw_text.strip())


def normalize_final_text(text: str) -> str:
    """Trim whitespace and a trailing run of underscores (Outlook divider residue)."""
    return TRAILING_UNDERSCORES_RE.sub("", text.strip()).strip()


def split_content_at_disclaimer(content: str) -> Tuple[str, Optional[str]]:
    """
    Split content into the main text and the stripped remainder, for
    "view more" display.

    Returns:
        (main, remainder) when a disclaimer, forwarded wrapper or signature
        was removed; (content, None) otherwise.
    """
    cleaned = clean_email_content(content, None)

    if not any(cleaned.has_stage(tag) for tag in SPLIT_TAGS):
        return content, None

    main = cleaned.cleaned_text
    position = content.find(main) if main else -1
    if position != -1:
        remainder = content[position + len(main):].strip()
    else:
        remainder = content[len(main):].strip()

    return main, remainder or None
