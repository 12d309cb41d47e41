"""
Logging setup for AuthKit using Python's standard logging
with JSON formatting for structured error logs.

Log destinations:
- Console (stderr): Human-readable format for debugging
- {log_dir}/errors.jsonl: JSON format for error tracking (only when log_dir is configured)
"""

from __future__ import annotations

import logging
import logging.handlers
import re
import sys

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pythonjsonlogger import json as jsonlogger

from authkit.api.middleware.request_context import current_request
from authkit.core.constants import LOG_BACKUP_COUNT_ERRORS, LOG_MAX_SIZE, LOGGER_NAME, get_settings

# Secret redaction patterns
REDACTION_PATTERNS = [
    (r"\bsk_live_[A-Za-z0-9_\-]+", "sk_live_[REDACTED]"),
    (r"\bsk_test_[A-Za-z0-9_\-]+", "sk_test_[REDACTED]"),
    (r"\b(secret|token)\s*[:=]\s*\S+", r"\1=[REDACTED]"),
]


@dataclass
class RemoteCall:
    """Structured representation of one platform call for logging."""

    endpoint: str
    method: str
    url: str
    status_code: int | None = None
    duration_ms: float | None = None
    error: str | None = None
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())


class ErrorFilter(logging.Filter):
    """Filter to only allow ERROR and CRITICAL logs"""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that adds colors to log levels.
    Format: HH:MM:SS [LEVEL] logger_name - message
    """

    GREY = "\x1b[38;20m"
    GREEN = "\x1b[32;20m"
    YELLOW = "\x1b[33;20m"
    RED = "\x1b[31;20m"
    BOLD_RED = "\x1b[31;1m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        level_fmt = f"[{record.levelname}]"
        color = self.LEVEL_COLORS.get(record.levelno)
        if color:
            level_fmt = f"{color}{level_fmt}{self.RESET}"

        record.asctime = self.formatTime(record, "%H:%M:%S")
        return f"{record.asctime} {level_fmt} {record.name} - {record.getMessage()}"


def setup_logging(
    name: str = LOGGER_NAME,
    debug: bool | None = None,
    log_dir: Path | None = None,
) -> logging.Logger:
    """
    Set up logging handlers for the SDK logger.

    Args:
        name: Logger name
        debug: Enable debug logging (defaults to the ``debug`` setting)
        log_dir: Directory for the JSON error log (defaults to the ``log_dir`` setting)

    Returns:
        Configured logger instance
    """
    settings = get_settings()
    if debug is None:
        debug = settings.debug
    if log_dir is None:
        log_dir = settings.log_dir

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)  # Capture all, filter at handler level
    logger.handlers = []

    # --- Console Handler (Human-readable) ---
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_handler.setFormatter(ColoredConsoleFormatter())
    logger.addHandler(console_handler)

    # --- Error Log Handler (JSON) ---
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        error_handler = logging.handlers.RotatingFileHandler(
            log_dir / "errors.jsonl",
            maxBytes=LOG_MAX_SIZE,
            backupCount=LOG_BACKUP_COUNT_ERRORS,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.addFilter(ErrorFilter())
        error_handler.setFormatter(
            jsonlogger.JsonFormatter(
                "%(timestamp)s %(levelname)s %(name)s %(message)s",
                timestamp=True,
            )
        )
        logger.addHandler(error_handler)

    return logger


class AuthKitLogger:
    """
    High-level logging interface for AuthKit.
    Wraps standard Python logging with context enrichment and secret redaction.

    Handlers are attached on first use, so importing the SDK neither reads
    settings nor touches logging configuration.
    """

    def __init__(self, name: str = LOGGER_NAME):
        self.name = name
        self._logger: logging.Logger | None = None

    @property
    def logger(self) -> logging.Logger:
        if self._logger is None:
            self._logger = setup_logging(self.name)
        return self._logger

    def _enrich_context(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        """Enrich log arguments with request context."""
        if ctx := current_request():
            for key, value in ctx.log_fields().items():
                kwargs.setdefault(key, value)
        return kwargs

    def _redact_content(self, text: str) -> str:
        """Redact secrets from text using defined patterns."""
        if not text:
            return text

        redacted = text
        for pattern, replacement in REDACTION_PATTERNS:
            redacted = re.sub(pattern, replacement, redacted)
        return redacted

    def debug(self, message: str, **kwargs: Any) -> None:
        self.logger.debug(self._redact_content(message), extra=self._enrich_context(kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self.logger.info(self._redact_content(message), extra=self._enrich_context(kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self.logger.warning(self._redact_content(message), extra=self._enrich_context(kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Error level logging with optional exception info"""
        self.logger.error(self._redact_content(message), extra=self._enrich_context(kwargs), exc_info=exc_info)

    def log_remote_call(self, call: RemoteCall) -> None:
        """Log the outcome of one platform call."""
        msg_parts = [f"{call.method} {call.endpoint}"]
        if call.status_code is not None:
            msg_parts.append(f"-> {call.status_code}")
        if call.duration_ms is not None:
            msg_parts.append(f"[{call.duration_ms:.0f}ms]")

        extra_data: dict[str, Any] = {
            "remote_call": True,
            "endpoint": call.endpoint,
            "http_method": call.method,
            "url": call.url,
            "call_timestamp": call.timestamp,
        }
        if call.status_code is not None:
            extra_data["status_code"] = call.status_code
        if call.duration_ms is not None:
            extra_data["ms"] = int(call.duration_ms)

        if call.error:
            msg_parts.append(f"failed: {call.error}")
            self.warning(" ".join(msg_parts), **extra_data)
        else:
            self.debug(" ".join(msg_parts), **extra_data)


# Global logger instance
logger = AuthKitLogger()
