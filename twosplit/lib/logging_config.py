"""Structured logging configuration.

Stdout carries the MCP protocol stream, so every handler installed here
writes to stderr.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add correlation ID if present in record
        if hasattr(record, "correlation_id"):
            log_data["correlation_id"] = record.correlation_id

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        # Add extra fields from record.__dict__ that start with "extra_"
        for key, value in record.__dict__.items():
            if key.startswith("extra_"):
                log_data[key.replace("extra_", "", 1)] = value

        return json.dumps(log_data, default=str)


def setup_logging(
    service_name: str,
    level: str = "INFO",
    fmt: str = "json",
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """Configure logging for the server process.

    Args:
        service_name: Name of the service (e.g., "twosplit")
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: "json" for structured output, "text" for a plain line format
        stream: Output stream (defaults to stderr)

    Returns:
        The installed handler
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    if fmt == "json":
        handler.setFormatter(StructuredFormatter(service_name))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()  # Remove any existing handlers
    root_logger.addHandler(handler)

    # Silence noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("anthropic").setLevel(logging.WARNING)

    return handler


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    correlation_id: Optional[str] = None,
    **extra_fields: Any,
):
    """Log a message with additional context fields.

    Args:
        logger: Logger instance
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        correlation_id: Optional correlation ID
        **extra_fields: Additional fields to include in structured log
    """
    # Create extra dict with "extra_" prefix
    extra = {f"extra_{k}": v for k, v in extra_fields.items()}

    if correlation_id:
        extra["correlation_id"] = correlation_id

    log_method = getattr(logger, level.lower())
    log_method(message, extra=extra)
