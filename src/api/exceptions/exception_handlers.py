"""
Exception handlers mapping detection errors to API error responses.

Every handler logs the original error before responding. Error bodies have
the shape ``{"error": ..., "details": ...}`` where ``details`` is only
present for dependency and internal failures.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core.config import Config
from src.core.exceptions import (
    InternalDetectionError,
    InvalidRequestBodyError,
    MalformedUpstreamResponseError,
    TextValidationError,
    UpstreamUnavailableError,
)
from src.core.logging import get_logger

logger = get_logger(__name__)

# Constants for user-facing error messages
UPSTREAM_UNAVAILABLE_MSG = (
    "AI detection service is currently unavailable. "
    "Please make sure the classifier API is running at {base_url}"
)
MALFORMED_UPSTREAM_MSG = "AI detection service returned an unexpected response."
INTERNAL_ERROR_MSG = "An error occurred during text analysis. Please try again."
HIDDEN_DETAILS_MSG = "Internal server error"


def _config(request: Request) -> Config:
    return request.app.state.config


def _error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTPException raised by routing or request parsing."""
    logger.error(
        "http_exception",
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
        detail=exc.detail,
    )
    detail = str(exc.detail) if exc.detail else "An error occurred"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None),
    )


async def invalid_body_exception_handler(
    request: Request, exc: InvalidRequestBodyError
) -> JSONResponse:
    logger.error(
        "invalid_request_body",
        path=request.url.path,
        method=request.method,
        error=exc.message,
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def text_validation_exception_handler(
    request: Request, exc: TextValidationError
) -> JSONResponse:
    """Validation messages are returned verbatim; they name the failed constraint."""
    logger.error(
        "text_validation_failed",
        path=request.url.path,
        method=request.method,
        reason=exc.reason.value,
        error=exc.message,
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def upstream_unavailable_exception_handler(
    request: Request, exc: UpstreamUnavailableError
) -> JSONResponse:
    base_url = _config(request).classifier.base_url
    logger.error(
        "classifier_unavailable",
        path=request.url.path,
        method=request.method,
        base_url=base_url,
        prediction_status=exc.prediction_status,
        probability_status=exc.probability_status,
        error=exc.message,
    )
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        UPSTREAM_UNAVAILABLE_MSG.format(base_url=base_url),
        exc.message,
    )


async def malformed_upstream_exception_handler(
    request: Request, exc: MalformedUpstreamResponseError
) -> JSONResponse:
    logger.error(
        "classifier_malformed_response",
        path=request.url.path,
        method=request.method,
        endpoint=exc.endpoint,
        error=exc.message,
    )
    return _error_response(status.HTTP_502_BAD_GATEWAY, MALFORMED_UPSTREAM_MSG, exc.message)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Returns 500 with the exception text as ``details`` unless
    ``expose_error_details`` is disabled.
    """
    logger.error(
        "unexpected_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=True,
    )
    details = str(exc) if _config(request).expose_error_details else HIDDEN_DETAILS_MSG
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MSG, details)


async def internal_detection_exception_handler(
    request: Request, exc: InternalDetectionError
) -> JSONResponse:
    """Handle failures wrapped by the detection pipeline; logs the original cause."""
    cause = exc.__cause__ or exc
    logger.error(
        "internal_detection_error",
        path=request.url.path,
        method=request.method,
        error=exc.message,
        error_type=type(cause).__name__,
        exc_info=cause,
    )
    details = exc.message if _config(request).expose_error_details else HIDDEN_DETAILS_MSG
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MSG, details)


def register_exception_handlers(app):
    """
    Register all custom exception handlers with the FastAPI app.
    """
    # Standard FastAPI exceptions
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Detection pipeline errors
    app.add_exception_handler(InvalidRequestBodyError, invalid_body_exception_handler)
    app.add_exception_handler(TextValidationError, text_validation_exception_handler)
    app.add_exception_handler(UpstreamUnavailableError, upstream_unavailable_exception_handler)
    app.add_exception_handler(MalformedUpstreamResponseError, malformed_upstream_exception_handler)
    app.add_exception_handler(InternalDetectionError, internal_detection_exception_handler)

    # Catch-all for any other exceptions
    app.add_exception_handler(Exception, generic_exception_handler)
