"""
Structured logging configuration for gqlexplorer.

Provides JSON or text formatted logging with automatic context propagation
of the operation kind and entity key an edit is working on.

Usage:
    from gqlexplorer.logging_config import configure_logging, get_logger

    # Configure at application entry point
    configure_logging(level="DEBUG", json_output=False)

    # Get a structured logger
    logger = get_logger(__name__)
    logger.warning("Edit skipped", reason="mismatch")

    # Automatic context propagation
    with LogContext(operation="query", entity="query.user(id)"):
        logger.info("Argument added")  # Includes operation and entity
"""

import json
import logging
import os
import sys
import threading
import time
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, Dict, Optional

# Context variables for automatic field injection
_log_context: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})

# Environment configuration
LOG_LEVEL = os.environ.get("GQLEXPLORER_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = os.environ.get("GQLEXPLORER_LOG_FORMAT", "text")  # "json" or "text"


@dataclass
class LogRecord:
    """Structured log record with all context fields."""
    timestamp: str
    level: str
    logger: str
    message: str
    fields: Dict[str, Any] = field(default_factory=dict)
    operation: Optional[str] = None
    entity: Optional[str] = None
    exception: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {
            "ts": self.timestamp,
            "level": self.level,
            "logger": self.logger,
            "msg": self.message,
        }
        if self.operation:
            result["operation"] = self.operation
        if self.entity:
            result["entity"] = self.entity
        if self.fields:
            result.update(self.fields)
        if self.exception:
            result["exception"] = self.exception
        return result

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), default=str)

    def to_text(self) -> str:
        """Format as human-readable text."""
        parts = [
            self.timestamp,
            f"[{self.level}]",
            f"[{self.logger}]",
        ]
        if self.operation:
            parts.append(f"[{self.operation}]")
        if self.entity:
            parts.append(f"[{self.entity}]")
        parts.append(self.message)
        if self.fields:
            parts.append(" ".join(f"{k}={v}" for k, v in self.fields.items()))
        if self.exception:
            parts.append(f"\n{self.exception.get('traceback', '')}")
        return " ".join(parts)


def _build_record(record: logging.LogRecord, timestamp: str, logger_name: str) -> LogRecord:
    ctx = _log_context.get()
    return LogRecord(
        timestamp=timestamp,
        level=record.levelname,
        logger=logger_name,
        message=record.getMessage(),
        fields=getattr(record, "structured_fields", {}),
        operation=ctx.get("operation") or getattr(record, "operation", None),
        entity=ctx.get("entity") or getattr(record, "entity", None),
    )


class JSONFormatter(logging.Formatter):
    """JSON log formatter with structured field support."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_record = _build_record(
            record,
            datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            record.name,
        )
        if record.exc_info:
            log_record.exception = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else "Unknown",
                "message": str(record.exc_info[1]) if record.exc_info[1] else "",
                "traceback": self.formatException(record.exc_info),
            }
        return log_record.to_json()


class TextFormatter(logging.Formatter):
    """Human-readable text formatter with structured field support."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as text."""
        log_record = _build_record(
            record,
            datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
            record.name.split(".")[-1],  # Short name
        )
        if record.exc_info:
            log_record.exception = {"traceback": self.formatException(record.exc_info)}
        return log_record.to_text()


class StructuredLogger:
    """
    Structured logger wrapper with automatic context propagation.

    Provides methods for logging with structured fields that are
    serialized by JSONFormatter or TextFormatter.
    """

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)

    def _log(
        self,
        level: int,
        message: str,
        exc_info: bool = False,
        **fields: Any,
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        extra = {"structured_fields": fields}
        self._logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **fields: Any) -> None:
        """Log at DEBUG level with optional structured fields."""
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        """Log at INFO level with optional structured fields."""
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        """Log at WARNING level with optional structured fields."""
        self._log(logging.WARNING, message, **fields)


class LogContext:
    """
    Context manager for setting log context fields.

    All logs within the context automatically include the specified fields.
    """

    def __init__(self, **fields: Any):
        self._fields = fields
        self._token: Optional[Token[Dict[str, Any]]] = None

    def __enter__(self) -> "LogContext":
        current = _log_context.get()
        self._token = _log_context.set({**current, **self._fields})
        return self

    def __exit__(self, *args) -> None:
        if self._token is not None:
            _log_context.reset(self._token)


# Logger cache (thread-safe)
_loggers: Dict[str, StructuredLogger] = {}
_loggers_lock = threading.Lock()


def get_logger(name: str) -> StructuredLogger:
    """
    Get or create a structured logger by name (thread-safe).

    Args:
        name: Logger name (typically __name__)

    Returns:
        StructuredLogger instance
    """
    with _loggers_lock:
        if name not in _loggers:
            _loggers[name] = StructuredLogger(name)
        return _loggers[name]


def configure_logging(
    level: str | None = None,
    json_output: bool | None = None,
    propagate: bool = True,
) -> None:
    """
    Configure logging for the gqlexplorer package.

    Unlike an application entry point, a library only touches its own
    logger: the root logger is left alone.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON format; if False, text format
        propagate: Whether to propagate to the root logger
    """
    log_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.WARNING)
    use_json = json_output if json_output is not None else (LOG_FORMAT == "json")

    formatter = JSONFormatter() if use_json else TextFormatter()

    package_logger = logging.getLogger("gqlexplorer")
    package_logger.setLevel(log_level)
    package_logger.propagate = propagate

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    package_logger.addHandler(console_handler)


def log_function(level: str = "DEBUG", log_duration: bool = True):
    """
    Decorator to log function completion and duration.

    Failures are logged with the exception and re-raised.

    Args:
        level: Log level for completion records
        log_duration: Whether to log execution duration
    """
    log_level = getattr(logging, level.upper(), logging.DEBUG)

    def decorator(func: Callable) -> Callable:
        logger = get_logger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            fields: Dict[str, Any] = {"function": func.__name__}
            start = time.monotonic()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                fields["duration_ms"] = (time.monotonic() - start) * 1000
                fields["error"] = str(e)
                logger._log(
                    logging.ERROR, f"Function failed: {func.__name__}", exc_info=True, **fields
                )
                raise
            if log_duration:
                fields["duration_ms"] = (time.monotonic() - start) * 1000
            logger._log(log_level, f"Function completed: {func.__name__}", **fields)
            return result

        return wrapper

    return decorator
