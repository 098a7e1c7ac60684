"""
EmailBrief — compact display/extraction view of a cleaned email.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class BriefSignals(BaseModel):
    is_forwarded: bool = False
    has_thread: bool = False
    has_disclaimer: bool = False
    has_calendar: bool = False


class EmailBrief(BaseModel):
    """Cleaned text plus snippet, one-sentence summary and display headers."""

    cleaned_text: str
    snippet: str = Field(..., max_length=280)
    summary: str = Field(..., description="~120 char one-sentence summary, ellipsis when cut.")
    display_subject: str
    display_from_email: Optional[str] = None
    display_from_name: Optional[str] = None
    signals: BriefSignals = Field(default_factory=BriefSignals)
