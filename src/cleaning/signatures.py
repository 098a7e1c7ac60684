"""
Signature Stripping — removes trailing signature blocks.

Ordered cascade of independent detectors. Each detector returns a cut
offset or None; the first detector that returns an offset leaving some
content in front of it wins:

    0. "--" delimiter line            (hard cut)
    1. Client intro phrases           ("Sent from my iPhone", ...)
    2. "<sender name> |" line
    3. C:/M: phone line               (look back for "Name | Title")
    4. "First Last | Title" line
    5. mailto: link                   (look back for a name line)
    6. Bracketed company tagline      (look back for name/phone/pipe line)
    7. Phone number near the bottom   (walk up over short lines)
"""
import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from src.cleaning.text_utils import line_index_at, line_offsets, min_offset
from src.config.constants import (
    SHORT_EMAIL_CHARS,
    SIGN_OFF_WORDS,
    SIGNATURE_DELIMITER_MIN_OFFSET,
    SIGNATURE_INTRO_PHRASES,
    SIGNATURE_INTRO_RATIO_LONG,
    SIGNATURE_INTRO_RATIO_SHORT,
    SIGNATURE_MAILTO_LOOKBACK,
    SIGNATURE_MAILTO_MIN_OFFSET,
    SIGNATURE_PHONE_LOOKBACK,
    SIGNATURE_PHONE_MIN_OFFSET,
    SIGNATURE_PIPE_MIN_OFFSET_LONG,
    SIGNATURE_PIPE_MIN_OFFSET_SHORT,
    SIGNATURE_SENDER_MIN_OFFSET,
    SIGNATURE_SHORT_LINE_CHARS,
    SIGNATURE_TAGLINE_LOOKBACK,
    SIGNATURE_TAGLINE_MIN_CHARS,
    SIGNATURE_TAGLINE_MIN_OFFSET,
    SIGNATURE_TAIL_LINES_LONG,
    SIGNATURE_TAIL_LINES_SHORT,
    SIGNATURE_TAIL_RATIO_LONG,
    SIGNATURE_TAIL_RATIO_SHORT,
    SIGNATURE_WALKUP_MAX_LINES,
)

logger = logging.getLogger(__name__)

DELIMITER_RE = re.compile(r"\n-- ?\r?(?=\n|$)")

INTRO_RE = re.compile(
    r"^[ \t]*(?:" + "|".join(re.escape(p) for p in SIGNATURE_INTRO_PHRASES) + r")",
    re.IGNORECASE | re.MULTILINE,
)

CELL_PHONE_LINE_RE = re.compile(r"^[ \t]*[CM][ \t]*:[ \t]*\+?\(?\d[\d \t().-]{6,}\d", re.MULTILINE)

NAME_TITLE_RE = re.compile(
    r"^[ \t]*[A-Z][A-Za-z'’.-]+(?:[ \t]+[A-Z][A-Za-z'’.-]*){1,2}[ \t]*\|[ \t]*\S",
    re.MULTILINE,
)

NAME_LIKE_RE = re.compile(r"^[A-Z][a-z'’-]+(?:[ \t]+(?:[A-Z]\.|[A-Z][A-Za-z'’-]+)){1,3}[,.]?$")

LABELLED_PHONE_RE = re.compile(
    r"\b(?:(?i:tel|phone|mobile|cell|fax|direct line|direct|office|work|main)[ \t]*[:.]|[TMPOCDF][ \t]*:)"
    r"[ \t]*(\+?[\d \t\-().]{7,})"
)
LABELLED_PHONE_MIN_DIGITS = 7

BARE_PHONE_RE = re.compile(r"^\+?\(?\d[\d \t().-]{8,}\d$")
BARE_PHONE_MIN_DIGITS = 10

TAGLINE_RE = re.compile(
    r"\[(?![ \t]*(?:https?:|mailto:|cid:|image:))[^\]\n]{%d,}\]" % SIGNATURE_TAGLINE_MIN_CHARS,
    re.IGNORECASE,
)

SIGN_OFF_PREFIXES: Tuple[str, ...] = tuple(word.lower() for word in SIGN_OFF_WORDS)


@dataclass(frozen=True)
class SignatureContext:
    """Pre-split view of the text shared by every detector."""

    text: str
    lines: Tuple[str, ...]
    offsets: Tuple[int, ...]
    is_short: bool
    sender_name: Optional[str] = None

    @classmethod
    def build(cls, text: str, sender_name: Optional[str] = None) -> "SignatureContext":
        lines = tuple(text.split("\n"))
        return cls(
            text=text,
            lines=lines,
            offsets=tuple(line_offsets(lines)),
            is_short=len(text) < SHORT_EMAIL_CHARS,
            sender_name=(sender_name or "").strip() or None,
        )

    def line_at(self, offset: int) -> int:
        return line_index_at(self.offsets, offset)


# ======================================================================
# Line classifiers
# ======================================================================

def is_phone_line(line: str) -> bool:
    for match in LABELLED_PHONE_RE.finditer(line):
        if _digit_count(match.group(1)) >= LABELLED_PHONE_MIN_DIGITS:
            return True
    return bool(BARE_PHONE_RE.match(line)) and _digit_count(line) >= BARE_PHONE_MIN_DIGITS


def _digit_count(value: str) -> int:
    return sum(c.isdigit() for c in value)


def is_name_like_line(line: str) -> bool:
    """2-4 capitalized words and nothing else, excluding sign-offs ("Best Regards")."""
    if not NAME_LIKE_RE.match(line):
        return False
    return not line.lower().startswith(SIGN_OFF_PREFIXES)


def _topmost_line(
    ctx: SignatureContext,
    anchor: int,
    lookback: int,
    predicate: Callable[[str], bool],
) -> Optional[int]:
    """Topmost line in the *lookback* lines above *anchor* satisfying *predicate*."""
    found: Optional[int] = None
    for i in range(anchor - 1, max(-1, anchor - lookback - 1), -1):
        if predicate(ctx.lines[i].strip()):
            found = i
    return found


# ======================================================================
# Detectors
# ======================================================================

def detect_delimiter(ctx: SignatureContext) -> Optional[int]:
    threshold = min_offset(SIGNATURE_DELIMITER_MIN_OFFSET, len(ctx.text))
    for match in DELIMITER_RE.finditer(ctx.text):
        if match.start() > threshold:
            return match.start()
    return None


def detect_intro_phrase(ctx: SignatureContext) -> Optional[int]:
    ratio = SIGNATURE_INTRO_RATIO_SHORT if ctx.is_short else SIGNATURE_INTRO_RATIO_LONG
    match = INTRO_RE.search(ctx.text)
    if match and match.start() > len(ctx.text) * ratio:
        return match.start()
    return None


def detect_sender_pipe(ctx: SignatureContext) -> Optional[int]:
    if not ctx.sender_name:
        return None
    pattern = re.compile(r"^[ \t]*" + re.escape(ctx.sender_name) + r"[ \t]*\|", re.IGNORECASE | re.MULTILINE)
    for match in pattern.finditer(ctx.text):
        if match.start() > SIGNATURE_SENDER_MIN_OFFSET:
            return match.start()
    return None


def detect_cell_phone(ctx: SignatureContext) -> Optional[int]:
    match = CELL_PHONE_LINE_RE.search(ctx.text)
    if match is None:
        return None

    phone_line = ctx.line_at(match.start())
    for i in range(phone_line - 1, max(-1, phone_line - SIGNATURE_PHONE_LOOKBACK - 1), -1):
        if NAME_TITLE_RE.match(ctx.lines[i]):
            return ctx.offsets[i]

    offset = ctx.offsets[phone_line]
    if offset > SIGNATURE_PHONE_MIN_OFFSET:
        return offset
    return None


def detect_name_title(ctx: SignatureContext) -> Optional[int]:
    threshold = SIGNATURE_PIPE_MIN_OFFSET_SHORT if ctx.is_short else SIGNATURE_PIPE_MIN_OFFSET_LONG
    for match in NAME_TITLE_RE.finditer(ctx.text):
        if match.start() > threshold:
            return match.start()
    return None


def detect_mailto(ctx: SignatureContext) -> Optional[int]:
    index = ctx.text.lower().find("mailto:")
    if index == -1:
        return None

    anchor = ctx.line_at(index)
    name_line = _topmost_line(
        ctx,
        anchor,
        SIGNATURE_MAILTO_LOOKBACK,
        lambda line: is_name_like_line(line) or bool(NAME_TITLE_RE.match(line)),
    )
    if name_line is not None and ctx.offsets[name_line] > SIGNATURE_MAILTO_MIN_OFFSET:
        return ctx.offsets[name_line]
    return None


def detect_tagline(ctx: SignatureContext) -> Optional[int]:
    match = TAGLINE_RE.search(ctx.text)
    if match is None:
        return None

    anchor = ctx.line_at(match.start())
    sig_line = _topmost_line(
        ctx,
        anchor,
        SIGNATURE_TAGLINE_LOOKBACK,
        lambda line: (
            0 < len(line) < SIGNATURE_SHORT_LINE_CHARS
            and (is_name_like_line(line) or is_phone_line(line) or "|" in line)
        ),
    )
    if sig_line is not None and ctx.offsets[sig_line] > SIGNATURE_TAGLINE_MIN_OFFSET:
        return ctx.offsets[sig_line]
    return None


def detect_trailing_phone(ctx: SignatureContext) -> Optional[int]:
    total = len(ctx.lines)
    tail = SIGNATURE_TAIL_LINES_SHORT if ctx.is_short else SIGNATURE_TAIL_LINES_LONG
    ratio = SIGNATURE_TAIL_RATIO_SHORT if ctx.is_short else SIGNATURE_TAIL_RATIO_LONG

    phone_line = None
    for i in range(total - 1, max(-1, total - tail - 1), -1):
        if is_phone_line(ctx.lines[i].strip()):
            phone_line = i
            break

    if phone_line is None or phone_line <= total * ratio:
        return None

    cut_line = phone_line
    for i in range(phone_line - 1, max(-1, phone_line - SIGNATURE_WALKUP_MAX_LINES - 1), -1):
        line = ctx.lines[i].strip()
        if line == "" or len(line) < SIGNATURE_SHORT_LINE_CHARS:
            cut_line = i
        else:
            break
    return ctx.offsets[cut_line]


SIGNATURE_DETECTORS: Sequence[Tuple[str, Callable[[SignatureContext], Optional[int]]]] = (
    ("delimiter", detect_delimiter),
    ("intro_phrase", detect_intro_phrase),
    ("sender_pipe", detect_sender_pipe),
    ("cell_phone", detect_cell_phone),
    ("name_title", detect_name_title),
    ("mailto", detect_mailto),
    ("tagline", detect_tagline),
    ("trailing_phone", detect_trailing_phone),
)


def strip_signatures(text: str, sender_name: Optional[str] = None) -> str:
    """
    Remove a trailing signature block.

    Args:
        text: Plain-text email body.
        sender_name: Sender display name, enables the "<name> |" detector.

    Returns:
        Text before the signature (trimmed), or the input unchanged.
    """
    if not text:
        return text

    ctx = SignatureContext.build(text, sender_name)

    for name, detector in SIGNATURE_DETECTORS:
        cut = detector(ctx)
        if cut is None:
            continue
        retained = text[:cut].strip()
        if not retained:
            continue
        logger.debug("Signature detector '%s' cut at offset %d of %d", name, cut, len(text))
        return retained

    return text


def signature_detectors() -> List[str]:
    """Detector names in evaluation order."""
    return [name for name, _ in SIGNATURE_DETECTORS]
