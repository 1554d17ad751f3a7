"""
Domain exceptions raised by the detection pipeline.

Each exception is mapped to an HTTP response in
``src.api.exceptions.exception_handlers``.
"""

from enum import Enum


class DetectionError(Exception):
    """Base class for all detection pipeline errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationReason(str, Enum):
    MISSING_OR_WRONG_TYPE = "missing_or_wrong_type"
    TOO_SHORT = "too_short"


class TextValidationError(DetectionError):
    """Submitted text failed validation before any classifier call."""

    def __init__(self, reason: ValidationReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class InvalidRequestBodyError(DetectionError):
    """Request body is not a JSON object."""


class UpstreamUnavailableError(DetectionError):
    """
    The classifier could not be reached or answered with a non-success status.

    Carries the status observed on each endpoint; ``None`` means that call
    never produced a response.
    """

    def __init__(
        self,
        message: str,
        prediction_status: int | None = None,
        probability_status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.prediction_status = prediction_status
        self.probability_status = probability_status


class MalformedUpstreamResponseError(DetectionError):
    """The classifier answered 2xx but the body breaks its contract."""

    def __init__(self, message: str, endpoint: str) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class InternalDetectionError(DetectionError):
    """Any other failure while handling a detection request. Wraps the cause."""
