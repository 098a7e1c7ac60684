"""
Typed models for the cleaning pipeline output contract.

CleanedEmail is what the rendering layer and the suggestion service consume;
cleaning_applied is the audit trail of stages that changed content.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CleaningStageTag(str, Enum):
    """Closed set of stages that can appear in the audit trail."""

    FORWARDED_WRAPPER = "forwarded_wrapper"
    CALENDAR_CONTENT = "calendar_content"
    INLINE_QUOTES = "inline_quotes"
    DISCLAIMERS = "disclaimers"
    SIGNATURES = "signatures"
    HTML_SANITIZED = "html_sanitized"
    HTML_DISCLAIMERS = "html_disclaimers"
    FALLBACK_TOO_AGGRESSIVE = "fallback_too_aggressive"


# Execution order; cleaning_applied is always an ordered subsequence of this.
STAGE_ORDER: Tuple[CleaningStageTag, ...] = tuple(CleaningStageTag)


class OriginalSender(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    email: Optional[str] = None


class CleanedEmail(BaseModel):
    """Result of clean_email_content()."""

    model_config = ConfigDict(frozen=True)

    cleaned_text: str = Field(..., description="Plain text with wrappers, quotes, disclaimers and signatures removed.")
    cleaned_html: Optional[str] = Field(None, description="Sanitized HTML, None when no HTML body was supplied.")
    original_sender: Optional[OriginalSender] = Field(None, description="Sender recovered from a forwarded header.")
    original_subject: Optional[str] = None
    original_date: Optional[str] = None
    was_forwarded: bool = False
    cleaning_applied: List[CleaningStageTag] = Field(default_factory=list)

    @field_validator("cleaning_applied")
    @classmethod
    def validate_stage_order(cls, v: List[CleaningStageTag]) -> List[CleaningStageTag]:
        positions = [STAGE_ORDER.index(tag) for tag in v]
        if positions != sorted(set(positions)):
            raise ValueError(
                f"cleaning_applied must follow execution order without repeats, got {[t.value for t in v]}"
            )
        return v

    def has_stage(self, tag: CleaningStageTag) -> bool:
        return tag in self.cleaning_applied

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")
