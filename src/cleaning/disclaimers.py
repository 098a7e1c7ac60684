"""
Disclaimer Stripping — truncates at the earliest legal boilerplate opener.
"""
import logging
from typing import Optional

from src.cleaning.text_utils import min_offset
from src.config.constants import DISCLAIMER_MARKERS, DISCLAIMER_MIN_OFFSET

logger = logging.getLogger(__name__)


def find_disclaimer_index(text: str) -> Optional[int]:
    """
    Globally earliest marker occurrence past the minimum offset.

    Every occurrence of every marker is considered (case-insensitive), so a
    marker that also appears inside the greeting does not hide a later one.
    """
    lower = text.lower()
    threshold = min_offset(DISCLAIMER_MIN_OFFSET, len(text))
    earliest: Optional[int] = None

    for marker in DISCLAIMER_MARKERS:
        needle = marker.lower()
        start = lower.find(needle)
        while start != -1:
            if start > threshold:
                if earliest is None or start < earliest:
                    earliest = start
                break
            start = lower.find(needle, start + 1)

    return earliest


def strip_disclaimers(text: str) -> str:
    """
    Truncate the text at the earliest disclaimer marker.

    Args:
        text: Plain-text email body.

    Returns:
        Text before the disclaimer (trimmed), or the input unchanged.
    """
    if not text:
        return text

    index = find_disclaimer_index(text)
    if index is None:
        return text

    logger.debug("Disclaimer marker at offset %d of %d", index, len(text))
    return text[:index].strip()
