"""Input validation for submitted text."""
from typing import Any

from src.core.exceptions import TextValidationError, ValidationReason


def validate_text(value: Any, min_length: int) -> str:
    """Return the trimmed text or raise ``TextValidationError``.

    Empty strings count as missing, the same way absent and non-string
    values do.
    """
    if not value or not isinstance(value, str):
        raise TextValidationError(
            ValidationReason.MISSING_OR_WRONG_TYPE,
            "Text is required and must be a string",
        )

    trimmed = value.strip()
    if len(trimmed) < min_length:
        raise TextValidationError(
            ValidationReason.TOO_SHORT,
            f"Text is too short. Please enter at least {min_length} characters.",
        )

    return trimmed
