"""Logging configuration for the diary mood pipeline.

Pipeline events attach their measurements (chunk count, category sums, the
judged mood) as ``extra={"extra_fields": {...}}``. The JSON formatter emits
them as top-level keys; the standard formatter appends them as ``key=value``
pairs after the message.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional, TextIO

from diary_mood.config import get_settings

# Request ID context variable for tracking a diary save across async chunk calls
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

_logger: Optional[logging.Logger] = None


def _fields(record: logging.LogRecord) -> Dict[str, Any]:
    return getattr(record, "extra_fields", None) or {}


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_var.get()
        if request_id:
            log_data["request_id"] = request_id

        log_data.update(_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class StandardFormatter(logging.Formatter):
    """Standard formatter for development (human-readable)."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with request ID and structured fields."""
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get() or "N/A"
        line = super().format(record)
        fields = _fields(record)
        if fields:
            line += " | " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


def setup_logging(force: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Set up the ``diary_mood`` logger from settings.

    Args:
        force: Reconfigure even if logging was already set up
        stream: Output stream for the handler (defaults to stdout)

    Raises:
        ValueError: If settings fail production validation
    """
    global _logger

    if _logger is not None and not force:
        return _logger

    settings = get_settings()
    level = getattr(logging, settings.log_level)

    logger = logging.getLogger("diary_mood")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if settings.is_production else StandardFormatter())
    logger.addHandler(handler)

    # One line per chunk request otherwise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.propagate = False

    _logger = logger
    logger.debug(
        "Logging configured",
        extra={
            "extra_fields": {
                "log_level": settings.log_level,
                "environment": settings.environment.value,
            }
        },
    )

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance."""
    if name:
        return logging.getLogger(f"diary_mood.{name}")
    return logging.getLogger("diary_mood")


def set_request_id(request_id: str) -> None:
    """Set the request ID for the current context."""
    request_id_var.set(request_id)


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    **kwargs: Any,
) -> None:
    """Log an error with context."""
    logger = get_logger("error")
    extra_fields = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "context": context or {},
        **kwargs,
    }
    logger.error(
        f"Error: {type(error).__name__}: {str(error)}",
        exc_info=error,
        extra={"extra_fields": extra_fields},
    )
