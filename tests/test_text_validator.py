import pytest

from src.core.exceptions import TextValidationError, ValidationReason
from src.services.text_validator import validate_text

MIN_LENGTH = 10


@pytest.mark.parametrize("value", [None, "", 42, ["some text here"], {"text": "nested value"}])
def test_validate_text_rejects_missing_or_non_string(value):
    with pytest.raises(TextValidationError) as exc:
        validate_text(value, MIN_LENGTH)

    assert exc.value.reason is ValidationReason.MISSING_OR_WRONG_TYPE
    assert exc.value.message == "Text is required and must be a string"


@pytest.mark.parametrize("value", ["hi", "   short   ", "123456789", "          "])
def test_validate_text_rejects_short_text(value):
    with pytest.raises(TextValidationError) as exc:
        validate_text(value, MIN_LENGTH)

    assert exc.value.reason is ValidationReason.TOO_SHORT
    assert exc.value.message == "Text is too short. Please enter at least 10 characters."


def test_validate_text_returns_trimmed_text():
    assert validate_text("  exactly 10  ", MIN_LENGTH) == "exactly 10"


def test_validate_text_honours_custom_minimum():
    with pytest.raises(TextValidationError) as exc:
        validate_text("twelve chars", min_length=20)

    assert "at least 20 characters" in exc.value.message
