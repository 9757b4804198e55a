"""Structured logging with JSON output and correlation ID support."""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any, ClassVar

# Correlation ID shared by every log line of one request
correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)

# Extra key/values attached to every log line (video_id, user_id, ...)
log_context_var: ContextVar[dict[str, Any]] = ContextVar("log_context")

# Attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "taskName"}


def get_correlation_id() -> str | None:
    """Get the current correlation ID."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set the correlation ID for the current context.

    Args:
        correlation_id: Optional correlation ID. Generated if not provided.

    Returns:
        The correlation ID that was set.
    """
    cid = correlation_id or str(uuid.uuid4())
    correlation_id_var.set(cid)
    return cid


def get_log_context() -> dict[str, Any]:
    """Get a copy of the current logging context."""
    return dict(log_context_var.get({}))


def set_log_context(**kwargs: Any) -> None:
    """Add key-value pairs to the logging context."""
    log_context_var.set({**log_context_var.get({}), **kwargs})


def clear_log_context() -> None:
    """Clear the logging context."""
    log_context_var.set({})


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRS
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per log line."""

    def __init__(self, *, include_path: bool = True) -> None:
        """Initialize the JSON formatter.

        Args:
            include_path: Include source file path and line number.
        """
        super().__init__()
        self.include_path = include_path

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        payload: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }
        if self.include_path:
            payload["path"] = f"{record.pathname}:{record.lineno}"

        cid = get_correlation_id()
        if cid:
            payload["correlation_id"] = cid

        payload["message"] = record.getMessage()

        context = get_log_context()
        if context:
            payload["context"] = context

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        payload.update(_extra_fields(record))
        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter for local development."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET: ClassVar[str] = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as colored text."""
        color = self.COLORS.get(record.levelname, "")
        parts = [
            datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S"),
            f"{color}{record.levelname:8}{self.RESET}",
            f"[{record.name}]",
        ]

        cid = get_correlation_id()
        if cid:
            parts.append(f"[{cid[:8]}]")

        parts.append(record.getMessage())

        extras = _extra_fields(record)
        if extras:
            parts.append(" ".join(f"{k}={v}" for k, v in sorted(extras.items())))

        message = " ".join(parts)
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return message


def configure_logging(
    level: str = "INFO",
    format_type: str = "json",
    logger_name: str | None = None,
) -> logging.Logger:
    """Configure and return a logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format_type: Output format ('json' or 'text').
        logger_name: Optional logger name. Defaults to root logger.

    Returns:
        Configured logger instance.
    """
    numeric_level = getattr(logging, level.upper())
    logger = logging.getLogger(logger_name)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(JsonFormatter() if format_type == "json" else TextFormatter())
    logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger by name (usually ``__name__``)."""
    return logging.getLogger(name)
