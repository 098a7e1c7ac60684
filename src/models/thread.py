"""
ThreadMessage and ParsedThread — reply/forward chain split into messages.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ThreadMessage:
    """One message block of a thread; index 0 is the most recent."""

    index: int
    content: str
    sender: Optional[str] = None
    date: Optional[str] = None


@dataclass
class ParsedThread:
    messages: List[ThreadMessage] = field(default_factory=list)
    latest_clean_text: str = ""
    thread_clean_text: Optional[str] = None     # None unless it adds context
    message_count: int = 0
