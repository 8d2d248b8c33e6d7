"""Error responses for the HTTP shell.

Provider failures never reach this layer: the stream service answers them
with fallback data. What is left are rejected requests (unknown provider
token, blank query) and bugs, both rendered as an ErrorDetail body.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

import structlog
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from streamx.core.logging import get_request_id
from streamx.core.metrics import MetricsCollector

logger = structlog.get_logger(__name__)


class ErrorCode:
    """Machine-readable error codes."""

    INVALID_PROVIDER = "INVALID_PROVIDER"
    INVALID_QUERY = "INVALID_QUERY"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_CODE_TO_STATUS: Dict[str, int] = {
    ErrorCode.INVALID_PROVIDER: HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_QUERY: HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.INTERNAL_ERROR: HTTP_500_INTERNAL_SERVER_ERROR,
}

ERROR_SUGGESTIONS: Dict[str, str] = {
    ErrorCode.INVALID_PROVIDER: (
        "Use 'All' or one of: YouTube, Dailymotion, PeerTube, TikTok, Rumble, Bandcamp"
    ),
    ErrorCode.INVALID_QUERY: "Provide a non-empty search query in the 'q' parameter",
    ErrorCode.NOT_FOUND: "Check the request path",
    ErrorCode.INTERNAL_ERROR: "Retry later; upstream data is served from fallbacks meanwhile",
}

# (status, error_code, message, details, suggestion)
ErrorParts = Tuple[int, str, str, Optional[str], Optional[str]]


class APIError(Exception):
    """Request rejected by an endpoint; rendered as a 4xx ErrorDetail."""

    def __init__(
        self,
        error_code: str,
        message: str,
        details: Optional[str] = None,
        suggestion: Optional[str] = None,
    ):
        """
        Args:
            error_code: Value from ErrorCode
            message: Human-readable message
            details: Extra context, e.g. the accepted values
            suggestion: Overrides the default suggestion for error_code
        """
        self.error_code = error_code
        self.message = message
        self.details = details
        self.suggestion = suggestion or ERROR_SUGGESTIONS.get(error_code)
        super().__init__(message)


def _status_to_error_code(status_code: int) -> str:
    if status_code == HTTP_400_BAD_REQUEST:
        return ErrorCode.INVALID_QUERY
    if status_code == HTTP_404_NOT_FOUND:
        return ErrorCode.NOT_FOUND
    return ErrorCode.INTERNAL_ERROR


def _describe(exc: Exception, path: str) -> ErrorParts:
    if isinstance(exc, APIError):
        logger.warning("request_rejected", error_code=exc.error_code, path=path)
        status = ERROR_CODE_TO_STATUS.get(exc.error_code, HTTP_500_INTERNAL_SERVER_ERROR)
        return status, exc.error_code, exc.message, exc.details, exc.suggestion

    if isinstance(exc, HTTPException):
        code = _status_to_error_code(exc.status_code)
        logger.warning("http_exception", status_code=exc.status_code, path=path)
        message = str(exc.detail) if exc.detail else "An error occurred"
        return exc.status_code, code, message, None, ERROR_SUGGESTIONS.get(code)

    # Internals stay in the log, never in the body
    logger.error(
        "unhandled_exception",
        error_type=type(exc).__name__,
        error=str(exc),
        path=path,
        exc_info=True,
    )
    code = ErrorCode.INTERNAL_ERROR
    return (
        HTTP_500_INTERNAL_SERVER_ERROR,
        code,
        "An unexpected error occurred",
        None,
        ERROR_SUGGESTIONS[code],
    )


def _error_body(
    error_code: str, message: str, details: Optional[str], suggestion: Optional[str]
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "error_code": error_code,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    optional = {"details": details, "request_id": get_request_id(), "suggestion": suggestion}
    body.update({key: value for key, value in optional.items() if value})
    return body


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any exception raised by an endpoint as an ErrorDetail response."""
    path = request.url.path
    status_code, error_code, message, details, suggestion = _describe(exc, path)

    MetricsCollector.record_error(error_code, path)
    return JSONResponse(
        status_code=status_code,
        content=_error_body(error_code, message, details, suggestion),
    )
