"""
Small text helpers shared by the cleaning stages.
"""
import bisect
import re
from typing import List, Sequence

from src.config.constants import SHORT_TEXT_OFFSET_RATIO

BLANK_RUN_RE = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")


def min_offset(absolute: int, text_length: int) -> float:
    """
    Minimum cut offset for a marker.

    Texts too short for the absolute offset to leave room for content use
    SHORT_TEXT_OFFSET_RATIO of their length instead.
    """
    return min(absolute, text_length * SHORT_TEXT_OFFSET_RATIO)


def line_offsets(lines: Sequence[str]) -> List[int]:
    """Start offset of every line of ``"\\n".join(lines)``."""
    offsets: List[int] = []
    position = 0
    for line in lines:
        offsets.append(position)
        position += len(line) + 1
    return offsets


def line_index_at(offsets: Sequence[int], offset: int) -> int:
    """Index of the line containing *offset*."""
    return max(0, bisect.bisect_right(offsets, offset) - 1)


def collapse_blank_lines(text: str) -> str:
    """Collapse runs of blank lines into a single blank line."""
    return BLANK_RUN_RE.sub("\n\n", text)
