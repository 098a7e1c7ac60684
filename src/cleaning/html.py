"""
HTML Sanitization & Cleaning.

- sanitize_html: strips executable / tracking constructs
- clean_html_content: mirrors calendar and disclaimer removal at HTML block
  granularity, then drops trailing empty blocks
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Tuple

from src.config.constants import (
    CALENDAR_MARKERS,
    DISCLAIMER_MARKERS,
    HTML_CALENDAR_MIN_RETAINED,
    HTML_DISCLAIMER_MIN_POSITION,
    HTML_DISCLAIMER_MIN_RETAINED,
)

logger = logging.getLogger(__name__)

# ======================================================================
# Sanitizer patterns
# ======================================================================
_PIXEL_DIM = r"[\"']?1(?:px)?[\"']?(?=[\s/>])"

SANITIZE_RULES: List[Tuple[str, Pattern[str], str]] = [
    ("script", re.compile(r"<script\b[\s\S]*?</script\s*>", re.IGNORECASE), ""),
    ("script_open", re.compile(r"<script\b[^>]*>", re.IGNORECASE), ""),
    ("style", re.compile(r"<style\b[\s\S]*?</style\s*>", re.IGNORECASE), ""),
    ("event_quoted", re.compile(r"\s+on\w+\s*=\s*(?:\"[^\"]*\"|'[^']*')", re.IGNORECASE), ""),
    ("event_unquoted", re.compile(r"\s+on\w+\s*=\s*[^\s>\"']+", re.IGNORECASE), ""),
    ("javascript_url", re.compile(r"javascript\s*:[^\"'\s>]*", re.IGNORECASE), ""),
    ("data_html_url", re.compile(r"data\s*:\s*text/html[^\"'\s>]*", re.IGNORECASE), ""),
    (
        "tracking_pixel",
        re.compile(
            r"<img\b(?=[^>]*\bwidth\s*=\s*" + _PIXEL_DIM + r")(?=[^>]*\bheight\s*=\s*" + _PIXEL_DIM + r")[^>]*>",
            re.IGNORECASE,
        ),
        "",
    ),
    ("meta_refresh", re.compile(r"<meta\b[^>]*http-equiv\s*=\s*[\"']?refresh[\"']?[^>]*>", re.IGNORECASE), ""),
]

# ======================================================================
# Cleaner patterns
# ======================================================================
CALENDAR_BLOCK_TAG_RE = re.compile(r"<(?:table|div)\b", re.IGNORECASE)
DISCLAIMER_BLOCK_TAG_RE = re.compile(r"<(?:div|p|table|td)\b", re.IGNORECASE)

TRAILING_EMPTY_RE = re.compile(
    r"(?:\s*(?:<div\b[^>]*>\s*</div>|<p\b[^>]*>\s*</p>|<br\s*/?\s*>))+\s*$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class HtmlCleanResult:
    html: str
    was_modified: bool


def sanitize_html(html: str) -> str:
    """
    Remove scripts, styles, event handlers, javascript:/data:text/html URLs,
    1x1 tracking pixels and meta refresh tags.
    """
    if not html:
        return html or ""

    result = html
    for name, pattern, replacement in SANITIZE_RULES:
        result, count = pattern.subn(replacement, result)
        if count:
            logger.debug("HTML sanitizer removed %d '%s' construct(s)", count, name)
    return result


def _last_tag_before(pattern: Pattern[str], html: str, index: int) -> Optional[int]:
    last = None
    for match in pattern.finditer(html, 0, index):
        last = match.start()
    return last


def clean_html_content(html: str, cleaned_text: str = "") -> HtmlCleanResult:
    """
    Truncate calendar and disclaimer blocks in sanitized HTML.

    Markers still present in *cleaned_text* were judged to be content by the
    plain-text stages and are left in place so both renditions agree.

    Args:
        html: Sanitized HTML.
        cleaned_text: Plain text as produced by the text stages.

    Returns:
        HtmlCleanResult; was_modified is True when a block was truncated.
    """
    if not html:
        return HtmlCleanResult(html=html or "", was_modified=False)

    text_lower = (cleaned_text or "").lower()
    result = html
    was_modified = False

    for marker in CALENDAR_MARKERS:
        if marker in text_lower:
            continue
        index = result.lower().find(marker)
        if index == -1:
            continue
        cut = _last_tag_before(CALENDAR_BLOCK_TAG_RE, result, index)
        if cut is not None and cut > len(result) * HTML_CALENDAR_MIN_RETAINED:
            logger.debug("HTML calendar block '%s' truncated at %d", marker, cut)
            result = result[:cut].rstrip()
            was_modified = True

    for marker in DISCLAIMER_MARKERS:
        needle = marker.lower()
        if needle in text_lower:
            continue
        index = result.lower().find(needle)
        if index == -1 or index <= len(result) * HTML_DISCLAIMER_MIN_POSITION:
            continue
        cut = _last_tag_before(DISCLAIMER_BLOCK_TAG_RE, result, index)
        if cut is not None and cut > len(result) * HTML_DISCLAIMER_MIN_RETAINED:
            logger.debug("HTML disclaimer '%s' truncated at %d", marker, cut)
            result = result[:cut].rstrip()
            was_modified = True

    result = TRAILING_EMPTY_RE.sub("", result)
    return HtmlCleanResult(html=result, was_modified=was_modified)
