"""
Output Validation — checks a cleaned email against the output contract.

Stages:
    1. Parse (CleanedEmail, dict or JSON string)
    2. Schema conformance (jsonschema, CLEANED_EMAIL_SCHEMA)
    3. Audit trail order and uniqueness
    4. Safety-net invariant against the original text body
    5. Consistency checks (warnings only)
"""
import json
import logging
from typing import List, Optional, Union

from jsonschema import ValidationError, validate

from src.config.constants import SAFETY_NET_MIN_ORIGINAL_CHARS, SAFETY_NET_MIN_RATIO
from src.config.schemas import CLEANED_EMAIL_SCHEMA
from src.models.cleaning import STAGE_ORDER, CleanedEmail, CleaningStageTag
from src.models.validation import ValidationResult

logger = logging.getLogger(__name__)

_FALLBACK = CleaningStageTag.FALLBACK_TOO_AGGRESSIVE.value
_HTML_TAGS = {CleaningStageTag.HTML_SANITIZED.value, CleaningStageTag.HTML_DISCLAIMERS.value}


def _as_dict(result: Union[CleanedEmail, dict, str]) -> dict:
    if isinstance(result, CleanedEmail):
        return result.to_dict()
    if isinstance(result, dict):
        return result
    if isinstance(result, str):
        return json.loads(result)
    raise TypeError(f"Cannot validate object of type {type(result).__name__}")


def validate_cleaned_email(
    result: Union[CleanedEmail, dict, str],
    original_text: Optional[str] = None,
) -> ValidationResult:
    """
    Validate one cleaning result.

    Args:
        result: CleanedEmail, its to_dict() form, or a JSON string of it.
        original_text: Raw text body the result was produced from; enables
            the safety-net check.

    Returns:
        ValidationResult with valid flag, errors, warnings and the parsed data.
    """
    errors: List[str] = []
    warnings: List[str] = []

    # ------------------------------------------------------------------
    # Stage 1: Parse
    # ------------------------------------------------------------------
    try:
        data = _as_dict(result)
    except json.JSONDecodeError as e:
        errors.append(f"Invalid JSON: {e}")
        return ValidationResult(valid=False, errors=errors, warnings=warnings)

    # ------------------------------------------------------------------
    # Stage 2: Schema validation
    # ------------------------------------------------------------------
    try:
        validate(instance=data, schema=CLEANED_EMAIL_SCHEMA)
    except ValidationError as e:
        errors.append(f"Schema violation: {e.message}")
        return ValidationResult(valid=False, errors=errors, warnings=warnings)

    # ------------------------------------------------------------------
    # Stage 3: Audit trail order
    # ------------------------------------------------------------------
    applied = data["cleaning_applied"]
    order = [tag.value for tag in STAGE_ORDER]
    positions = [order.index(tag) for tag in applied]
    if positions != sorted(positions):
        errors.append(f"cleaning_applied out of execution order: {applied}")

    # ------------------------------------------------------------------
    # Stage 4: Safety net
    # ------------------------------------------------------------------
    cleaned_text = data["cleaned_text"]
    if original_text is not None:
        if _FALLBACK in applied:
            if cleaned_text != original_text.strip():
                errors.append("fallback_too_aggressive applied but cleaned_text differs from the original")
        else:
            original_length = len(original_text)
            if (
                original_length > SAFETY_NET_MIN_ORIGINAL_CHARS
                and len(cleaned_text) < original_length * SAFETY_NET_MIN_RATIO
            ):
                errors.append(
                    f"cleaned_text keeps {len(cleaned_text)} of {original_length} chars without a fallback"
                )
            if len(cleaned_text) > original_length:
                warnings.append("cleaned_text is longer than the original text body")

    # ------------------------------------------------------------------
    # Stage 5: Consistency
    # ------------------------------------------------------------------
    if data["cleaned_html"] is None and _HTML_TAGS.intersection(applied):
        errors.append("HTML stage recorded but cleaned_html is null")

    if data["was_forwarded"] and data["original_sender"] is None:
        warnings.append("was_forwarded without an original_sender")

    if not data["was_forwarded"] and data["original_subject"] is not None:
        warnings.append("original_subject set on a message that was not forwarded")

    if errors:
        logger.warning("Cleaned email failed validation: %s", "; ".join(errors))

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings, data=data)
