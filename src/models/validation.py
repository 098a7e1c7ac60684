"""
ValidationResult — outcome of checking a cleaned email against its contract.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ValidationResult:
    """Errors make the result invalid; warnings are informational."""

    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    data: Optional[dict] = None     # parsed payload, set once parsing succeeds
