"""
JSON Schemas for the cleaning layer I/O contracts.

Two schemas:
1. RAW_EMAIL_BATCH_SCHEMA — batch input accepted by run_cleaning.py
2. CLEANED_EMAIL_SCHEMA   — one cleaned email as produced by CleanedEmail.to_dict()
"""
from src.models.cleaning import STAGE_ORDER

_NULLABLE_STRING: dict = {"type": ["string", "null"]}

# =============================================================================
# 1. Raw email batch (input)
# =============================================================================
RAW_EMAIL_BATCH_SCHEMA: dict = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "message_id": _NULLABLE_STRING,
            "subject": _NULLABLE_STRING,
            "text_body": _NULLABLE_STRING,
            "html_body": _NULLABLE_STRING,
            "sender_display_name": _NULLABLE_STRING,
            "textBody": _NULLABLE_STRING,
            "htmlBody": _NULLABLE_STRING,
            "senderDisplayName": _NULLABLE_STRING,
        },
    },
}

# =============================================================================
# 2. Cleaned email (output)
# =============================================================================
CLEANED_EMAIL_SCHEMA: dict = {
    "type": "object",
    "additionalProperties": False,
    "required": [
        "cleaned_text",
        "cleaned_html",
        "original_sender",
        "original_subject",
        "original_date",
        "was_forwarded",
        "cleaning_applied",
    ],
    "properties": {
        "cleaned_text": {"type": "string"},
        "cleaned_html": _NULLABLE_STRING,
        "original_sender": {
            "oneOf": [
                {"type": "null"},
                {
                    "type": "object",
                    "additionalProperties": False,
                    "required": ["name", "email"],
                    "properties": {
                        "name": _NULLABLE_STRING,
                        "email": _NULLABLE_STRING,
                    },
                },
            ],
        },
        "original_subject": _NULLABLE_STRING,
        "original_date": _NULLABLE_STRING,
        "was_forwarded": {"type": "boolean"},
        "cleaning_applied": {
            "type": "array",
            "uniqueItems": True,
            "items": {
                "type": "string",
                "enum": [tag.value for tag in STAGE_ORDER],
            },
        },
    },
}
