"""
RawEmail — immutable input to the cleaning pipeline.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RawEmail:
    """Email bodies as supplied by the ingestion step."""

    text_body: Optional[str] = None
    html_body: Optional[str] = None
    sender_display_name: Optional[str] = None
    message_id: Optional[str] = None
    subject: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "RawEmail":
        """Build from a snake_case or camelCase dict (ingestion payloads use both)."""
        if not isinstance(data, dict):
            raise TypeError(f"RawEmail.from_dict expects a dict, got {type(data).__name__}")
        return cls(
            text_body=data.get("text_body", data.get("textBody")),
            html_body=data.get("html_body", data.get("htmlBody")),
            sender_display_name=data.get("sender_display_name", data.get("senderDisplayName")),
            message_id=data.get("message_id", data.get("messageId")),
            subject=data.get("subject"),
        )

    @property
    def text(self) -> str:
        return self.text_body or ""
