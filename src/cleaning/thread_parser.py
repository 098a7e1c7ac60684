"""
Thread Parser — splits a reply/forward chain into message blocks.

Gives extraction steps both the latest message and a bounded, labelled
context of the earlier messages.
"""
import logging
import re
from typing import List, Optional, Tuple

from src.config.constants import (
    THREAD_MAX_BLOCK_LENGTH,
    THREAD_MAX_LENGTH,
    THREAD_MAX_MESSAGES,
)
from src.models.thread import ParsedThread, ThreadMessage

logger = logging.getLogger(__name__)

THREAD_MARKERS = [
    re.compile(r"^On .{10,100} wrote:[ \t]*$", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^On .{10,100} <.+?> wrote:[ \t]*$", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^-{3,}\s*Original Message\s*-{3,}", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^From:[ \t]*.+\n(?:Sent|Date):[ \t]*.+\nTo:[ \t]*.+\n(?:Subject:)?", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^_{20,}$", re.MULTILINE),
    re.compile(r"^-{10} Forwarded message -{10}$", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^-{5} Forwarded Message -{5}$", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^Begin forwarded message:$", re.IGNORECASE | re.MULTILINE),
]

ON_WROTE_META_RE = re.compile(r"^On (.+?) (.+?) wrote:$", re.IGNORECASE)
FROM_META_RE = re.compile(r"^From:\s*(.+?)$", re.IGNORECASE | re.MULTILINE)

BLOCK_BREAK_MIN_RATIO = 0.6


def _find_markers(text: str) -> List[Tuple[int, str]]:
    """Marker (position, matched text) pairs, one per position, longest match kept."""
    by_position = {}
    for pattern in THREAD_MARKERS:
        for match in pattern.finditer(text):
            current = by_position.get(match.start())
            if current is None or len(match.group(0)) > len(current):
                by_position[match.start()] = match.group(0)
    return sorted(by_position.items())


def truncate_block(text: str, max_length: int = THREAD_MAX_BLOCK_LENGTH) -> str:
    """Cut to *max_length*, at a sentence or line break when one is near the end."""
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    cut_point = max(truncated.rfind(". "), truncated.rfind("\n"))
    if cut_point > max_length * BLOCK_BREAK_MIN_RATIO:
        return text[:cut_point + 1].strip()
    return truncated.strip() + "..."


def extract_marker_meta(marker: str) -> Tuple[Optional[str], Optional[str]]:
    """Return (sender, date) parsed from a marker line, when it carries them."""
    first_line = marker.strip()
    match = ON_WROTE_META_RE.match(first_line)
    if match:
        return match.group(2), match.group(1)

    match = FROM_META_RE.search(marker)
    if match:
        return match.group(1).strip(), None

    return None, None


def parse_email_thread(text: Optional[str]) -> ParsedThread:
    """
    Parse email text into thread messages, most recent first.

    Args:
        text: Plain-text email body (raw or cleaned).

    Returns:
        ParsedThread. thread_clean_text is None for single messages and
        whenever the labelled context adds nothing beyond the latest message.
    """
    if not text or not text.strip():
        return ParsedThread()

    markers = _find_markers(text)
    if not markers:
        cleaned = text.strip()
        return ParsedThread(
            messages=[ThreadMessage(index=0, content=cleaned)],
            latest_clean_text=cleaned,
            message_count=1,
        )

    messages: List[ThreadMessage] = []

    first = text[:markers[0][0]].strip()
    if first:
        messages.append(ThreadMessage(index=0, content=truncate_block(first)))

    for i, (position, marker) in enumerate(markers):
        start = position + len(marker)
        end = markers[i + 1][0] if i + 1 < len(markers) else len(text)
        content = text[start:end].strip()
        if not content:
            continue
        sender, date = extract_marker_meta(marker)
        messages.append(
            ThreadMessage(
                index=len(messages),
                content=truncate_block(content),
                sender=sender,
                date=date,
            )
        )

    latest = messages[0].content if messages else text.strip()

    if len(messages) <= 1:
        return ParsedThread(
            messages=messages,
            latest_clean_text=latest,
            message_count=len(messages),
        )

    kept = messages[:THREAD_MAX_MESSAGES]
    parts: List[str] = []
    total = 0
    for i, message in enumerate(kept):
        label = "--- Message 1 (most recent) ---" if i == 0 else f"--- Message {i + 1} ---"
        block = f"{label}\n{message.content}"
        if total + len(block) > THREAD_MAX_LENGTH:
            break
        parts.append(block)
        total += len(block)

    thread_text = "\n\n".join(parts)
    logger.debug("Thread parsed: %d message(s), %d context chars", len(kept), len(thread_text))

    return ParsedThread(
        messages=kept,
        latest_clean_text=latest,
        thread_clean_text=thread_text if len(thread_text) > len(latest) else None,
        message_count=len(kept),
    )
