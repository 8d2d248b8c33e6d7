"""Structured logging setup.

Every log line is a structlog event. Lines emitted while an HTTP request is
being served carry that request's id, so one trending call can be followed
through mirror failovers and fallbacks.
"""

import contextvars
import logging
import sys
from typing import Any, Dict, List, Optional
from uuid import uuid4

import structlog

REQUEST_ID_PREFIX = "req_"

# Loggers of the HTTP client stack; they log every request at INFO
HTTP_CLIENT_LOGGERS = ("httpx", "httpcore")

request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)


def add_request_id(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """structlog processor copying the current request id into the event."""
    request_id = request_id_var.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def _renderer(log_format: str) -> Any:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """
    Route structlog through the stdlib root logger.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_format: "json" for production, anything else for console output
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    # Mirror failures are reported by the rotator; per-request client logs are noise
    for name in HTTP_CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_request_id,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _renderer(log_format),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def set_request_id(request_id: Optional[str] = None) -> str:
    """
    Bind a request id to the current context.

    Args:
        request_id: Caller-supplied id (e.g. from X-Request-ID); generated when absent

    Returns:
        The id now in effect
    """
    if not request_id:
        request_id = f"{REQUEST_ID_PREFIX}{uuid4().hex[:12]}"
    request_id_var.set(request_id)
    return request_id


def get_request_id() -> Optional[str]:
    return request_id_var.get()


def clear_request_id() -> None:
    request_id_var.set(None)
