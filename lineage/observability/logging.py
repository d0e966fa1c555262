"""
Structured Logging for the location lineage service.

Provides JSON-formatted logs for log aggregation and a readable console
format for local development.

Usage:
    from lineage.observability.logging import setup_logging, get_logger

    # At startup:
    setup_logging(service_name="api")

    # In any module:
    logger = get_logger(__name__)
    logger.info("Resolved ancestors", extra={"location": "Paris", "depth": 1})

Output format:
    {"timestamp": "2026-01-01T00:45:00.123Z", "level": "INFO", "service": "api",
     "logger": "lineage.services.ancestor_resolver", "message": "Resolved ancestors",
     "location": "Paris", "depth": 1, "trace_id": "abc123"}
"""

import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

# Per-task trace id; each asyncio task sees its own value
_trace_id: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)

# Standard LogRecord attributes, never emitted as extra fields
_RECORD_FIELDS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'thread', 'threadName', 'processName', 'process', 'exc_info',
    'exc_text', 'stack_info', 'message', 'msecs', 'relativeCreated',
    'taskName',
}


def get_trace_id() -> Optional[str]:
    """Get the current trace ID from context."""
    return _trace_id.get()


def set_trace_id(trace_id: str) -> None:
    """Set the trace ID in context."""
    _trace_id.set(trace_id)


def clear_trace_id() -> None:
    """Clear the trace ID from context."""
    _trace_id.set(None)


def _extra_fields(record: logging.LogRecord) -> dict:
    return {k: v for k, v in record.__dict__.items()
            if k not in _RECORD_FIELDS and not k.startswith('_')}


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Every line carries timestamp, level, service, logger and message, plus the
    trace id when one is set and any fields passed via extra={}.
    """

    def __init__(self, service_name: str = "unknown"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
        }

        trace_id = get_trace_id()
        if trace_id:
            log_entry["trace_id"] = trace_id

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # File/line info for errors
        if record.levelno >= logging.ERROR:
            log_entry["file"] = record.pathname
            log_entry["line"] = record.lineno
            log_entry["function"] = record.funcName

        for key, value in _extra_fields(record).items():
            try:
                json.dumps(value)
                log_entry[key] = value
            except (TypeError, ValueError):
                log_entry[key] = str(value)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable console formatter for local development.

    Format: [LEVEL] service/logger: [trace] message {extra_fields}
    """

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, service_name: str = "unknown", use_colors: bool = True):
        super().__init__()
        self.service_name = service_name
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record for console output."""
        level = record.levelname
        if self.use_colors:
            level = f"{self.COLORS.get(level, '')}{level}{self.RESET}"

        logger_name = record.name.split('.')[-1]

        extra = _extra_fields(record)
        extra_str = ""
        if extra:
            extra_str = " {" + ", ".join(f"{k}={v}" for k, v in extra.items()) + "}"

        trace_id = get_trace_id()
        trace_str = f" [{trace_id[:8]}]" if trace_id else ""

        message = f"[{level}] {self.service_name}/{logger_name}:{trace_str} {record.getMessage()}{extra_str}"

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


def setup_logging(
    service_name: str,
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> None:
    """
    Configure structured logging for a service.

    Args:
        service_name: Name of the service (e.g., "api", "seed")
        level: Log level. Defaults to LOG_LEVEL env var or INFO.
        json_format: Whether to use JSON format. Defaults to True unless
            LOG_FORMAT is "console".
    """
    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO")
    level = level.upper()
    log_level = getattr(logging, level, logging.INFO)

    if json_format is None:
        json_format = os.environ.get("LOG_FORMAT", "json").lower() not in ("console", "text")

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    if json_format:
        handler.setFormatter(JSONFormatter(service_name=service_name))
    else:
        handler.setFormatter(ConsoleFormatter(service_name=service_name))
    root_logger.addHandler(handler)

    # Noisy third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging initialized",
        extra={"log_level": level, "json_format": json_format},
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance, typically for __name__."""
    return logging.getLogger(name)


class LogContext:
    """
    Context manager for setting trace_id during request processing.

    Usage:
        with LogContext(trace_id="abc123"):
            logger.info("Processing")  # Will include trace_id in log
    """

    def __init__(self, trace_id: str):
        self.trace_id = trace_id
        self._token = None

    def __enter__(self):
        self._token = _trace_id.set(self.trace_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _trace_id.reset(self._token)
        return False
