"""
Forwarded Wrapper Extraction — first stage of the cleaning pipeline.

Detects the marker + header block a mail client inserts when forwarding,
returns the original message body and the recovered sender/subject/date.
Anything before the marker (the forwarder's note and signature) is dropped.
"""
import logging
import re
from typing import List, Optional, Tuple

from src.config.constants import (
    BARE_HEADER_SCAN_LINES,
    FORWARD_HEADER_SCAN_LINES,
    FORWARDED_MARKERS,
)
from src.models.forwarded import ForwardedMetadata, ForwardResult

logger = logging.getLogger(__name__)

HEADER_LINE_RE = re.compile(r"^(From|Subject|Date|To|Cc|Sent):\s*(.+)$", re.IGNORECASE)
LINE_SPLIT_RE = re.compile(r"\r?\n")

FROM_NAME_EMAIL_RE = re.compile(r"^(?:(.+?)\s*)?<([^<>]+)>$")
FROM_BARE_RE = re.compile(r"^<?([^<>\n]+?)>?$")


def strip_forwarded_wrapper(text: str) -> ForwardResult:
    """
    Strip a forwarded-message wrapper and extract the original metadata.

    Args:
        text: Raw plain-text email body.

    Returns:
        ForwardResult with the body after the header block and the
        ForwardedMetadata, or the input unchanged with metadata None.
    """
    if not text:
        return ForwardResult(body=text or "", metadata=None)

    marker_index, marker_length = _find_earliest_marker(text)

    if marker_index == -1:
        return _strip_bare_header_block(text)

    after_marker = text[marker_index + marker_length:]
    lines = LINE_SPLIT_RE.split(after_marker)
    headers, body_start = _scan_header_block(lines, FORWARD_HEADER_SCAN_LINES)

    if "from" not in headers and "subject" not in headers:
        logger.debug("Forward marker at %d without From/Subject headers", marker_index)
        return ForwardResult(body=after_marker.strip(), metadata=None)

    body = "\n".join(lines[body_start:]).strip()
    return ForwardResult(body=body, metadata=_build_metadata(headers))


# ======================================================================
# Internal helpers
# ======================================================================

def _find_earliest_marker(text: str) -> Tuple[int, int]:
    """Earliest marker position (case-insensitive); the longest marker wins a tie."""
    lower = text.lower()
    best_index, best_length = -1, 0

    for marker in FORWARDED_MARKERS:
        idx = lower.find(marker.lower())
        if idx == -1:
            continue
        if (
            best_index == -1
            or idx < best_index
            or (idx == best_index and len(marker) > best_length)
        ):
            best_index, best_length = idx, len(marker)

    return best_index, best_length


def _scan_header_block(lines: List[str], max_lines: int) -> Tuple[dict, int]:
    """
    Collect header values from the lines following a forward marker.

    The block ends at the first blank line after a header, at the first
    non-header line after a header, or after max_lines lines.

    Returns:
        (headers keyed by lowercase label, index of the first body line)
    """
    headers: dict = {}
    seen_header = False
    body_start = 0
    limit = min(max_lines, len(lines))

    for i in range(limit):
        line = lines[i].strip()
        match = HEADER_LINE_RE.match(line)

        if match:
            headers.setdefault(match.group(1).lower(), match.group(2).strip())
            seen_header = True
            body_start = i + 1
        elif seen_header:
            # Blank line closes the block; a content line is the body itself.
            body_start = i + 1 if line == "" else i
            break
        else:
            body_start = i + 1
    else:
        if not seen_header:
            body_start = 0

    return headers, body_start


def _strip_bare_header_block(text: str) -> ForwardResult:
    """
    Header block without a marker line, e.g. an exported forward or a short
    note above pasted headers. From: and Subject: may appear anywhere in the
    first lines; the first blank line after both ends the block.
    """
    lines = LINE_SPLIT_RE.split(text)
    headers: dict = {}
    block_end = -1

    for i in range(min(BARE_HEADER_SCAN_LINES, len(lines))):
        line = lines[i].strip()
        match = HEADER_LINE_RE.match(line)

        if match:
            headers.setdefault(match.group(1).lower(), match.group(2).strip())
        elif line == "" and "from" in headers and "subject" in headers:
            block_end = i
            break

    if block_end == -1:
        return ForwardResult(body=text, metadata=None)

    body = "\n".join(lines[block_end + 1:]).strip()
    return ForwardResult(body=body, metadata=_build_metadata(headers))


def _build_metadata(headers: dict) -> ForwardedMetadata:
    from_name, from_email = parse_from_value(headers.get("from"))
    return ForwardedMetadata(
        from_name=from_name,
        from_email=from_email,
        subject=headers.get("subject") or None,
        date=headers.get("date") or None,
    )


def parse_from_value(value: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Parse a From: header value.

    Formats: ``Name <email>``, ``<email>``, ``email``. A bare token without
    an ``@`` is taken as the display name.
    """
    if not value:
        return None, None

    value = value.strip()
    match = FROM_NAME_EMAIL_RE.match(value)
    if match:
        name = (match.group(1) or "").strip().strip('"').strip("'").strip()
        email = match.group(2).strip()
        return name or None, email or None

    match = FROM_BARE_RE.match(value)
    if match:
        token = match.group(1).strip()
        if "@" in token:
            return None, token
        return token.strip('"') or None, None

    return None, None
