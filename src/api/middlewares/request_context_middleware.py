"""
Middleware binding a request id to every log entry of a request.
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from src.core.logging import (
    clear_request_context,
    generate_request_id,
    get_logger,
    set_request_context,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Assigns a request id (or reuses the caller's ``X-Request-ID``) and echoes
    it on the response.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        set_request_context(request_id=request_id)
        try:
            response = await call_next(request)
            logger.debug(
                "request_completed",
                path=request.url.path,
                method=request.method,
                status_code=response.status_code,
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_context()
