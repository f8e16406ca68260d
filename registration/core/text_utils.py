# registration/core/text_utils.py
from __future__ import annotations

from typing import Any

# Max length (in characters) of every form field after trimming
FIELD_LIMITS = {
    "name": 100,
    "phone": 30,
    "email": 120,
    "region": 50,
}


def safe_text(value: Any, max_len: int) -> str:
    """
    Turn a raw form value into a bounded, trimmed string.

    - None → "" (missing field)
    - anything else → str(value), whitespace stripped
    - cut to max_len characters

    Never raises; an empty result means "field not provided".
    """
    if value is None:
        return ""
    return str(value).strip()[:max_len]


def sanitize_fields(payload: dict) -> dict:
    """Apply safe_text to every known form field of the payload."""
    return {
        field: safe_text(payload.get(field), max_len)
        for field, max_len in FIELD_LIMITS.items()
    }
