"""
ForwardedMetadata and ForwardResult — output of the forwarded-wrapper stage.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ForwardedMetadata:
    """Original sender/subject/date recovered from a forwarded header block."""

    from_name: Optional[str] = None
    from_email: Optional[str] = None
    subject: Optional[str] = None
    date: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "from_name": self.from_name,
            "from_email": self.from_email,
            "subject": self.subject,
            "date": self.date,
        }


@dataclass(frozen=True)
class ForwardResult:
    body: str
    metadata: Optional[ForwardedMetadata] = None
