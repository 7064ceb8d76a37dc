"""
Structured logging for ai-lib-errors.

Provides keyword-field logging with masking of credentials that providers
sometimes echo back inside error messages.
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
import time
from enum import Enum
from typing import Any, ClassVar

_LOG_LEVEL_ENV = "AI_LIB_ERRORS_LOG_LEVEL"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to standard logging level."""
        return getattr(logging, self.value)

    @classmethod
    def from_env(cls, default: LogLevel | None = None) -> LogLevel:
        """Read the initial level from ``AI_LIB_ERRORS_LOG_LEVEL``."""
        fallback = default or cls.WARNING
        raw = os.getenv(_LOG_LEVEL_ENV)
        if not raw:
            return fallback
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return fallback


class SensitiveDataMasker:
    """Masks credentials in log messages."""

    DEFAULT_PATTERNS: ClassVar[list[tuple[str, str]]] = [
        # OpenAI-style keys, including project keys
        (r"(sk-[a-zA-Z0-9_\-]{20,})", r"sk-***REDACTED***"),
        # Azure sends the key in an api-key header
        (r"(api[_-]?key[\"']?\s*[:=]\s*[\"']?)([^\"'\s,]+)", r"\1***REDACTED***"),
        (r"(Bearer\s+)([^\s]+)", r"\1***REDACTED***"),
        (r"(Authorization[\"']?\s*[:=]\s*[\"']?)([^\"'\s]+)", r"\1***REDACTED***"),
    ]

    def __init__(self, patterns: list[tuple[str, str]] | None = None) -> None:
        """Initialize masker with patterns.

        Args:
            patterns: List of (pattern, replacement) tuples
        """
        self._patterns = [
            (re.compile(p, re.IGNORECASE), r)
            for p, r in (patterns or self.DEFAULT_PATTERNS)
        ]

    def mask(self, text: str) -> str:
        """Mask sensitive data in text.

        Args:
            text: Text to mask

        Returns:
            Masked text
        """
        result = text
        for pattern, replacement in self._patterns:
            result = pattern.sub(replacement, result)
        return result

    def mask_dict(self, data: dict[str, Any]) -> dict[str, Any]:
        """Mask sensitive data in a dictionary of log fields.

        Keys that look like credentials are replaced outright; string values
        are masked; nested dictionaries are walked.

        Args:
            data: Dictionary to mask

        Returns:
            Masked copy of the dictionary
        """
        result: dict[str, Any] = {}
        for key, value in data.items():
            key_lower = key.lower()
            if any(s in key_lower for s in ("key", "token", "secret", "auth")):
                result[key] = "***REDACTED***"
            elif isinstance(value, str):
                result[key] = self.mask(value)
            elif isinstance(value, dict):
                result[key] = self.mask_dict(value)
            else:
                result[key] = value
        return result


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def __init__(self, masker: SensitiveDataMasker | None = None) -> None:
        """Initialize formatter.

        Args:
            masker: Sensitive data masker
        """
        super().__init__()
        self._masker = masker or SensitiveDataMasker()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "message": self._masker.mask(record.getMessage()),
        }
        if hasattr(record, "extra_fields"):
            log_data.update(self._masker.mask_dict(record.extra_fields))
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter: ``time | level | logger | msg | k=v``."""

    def __init__(self, masker: SensitiveDataMasker | None = None) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self._masker = masker or SensitiveDataMasker()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as text."""
        original_msg = record.msg
        record.msg = self._masker.mask(str(record.msg))
        result = super().format(record)
        record.msg = original_msg

        if fields := getattr(record, "extra_fields", None):
            masked = self._masker.mask_dict(fields)
            result = f"{result} | " + " ".join(f"{k}={v}" for k, v in masked.items())
        return result


class ErrorsLogger:
    """Logger for ai-lib-errors with structured fields.

    Example:
        >>> logger = ErrorsLogger.get_logger("ai_lib_errors.errors.decode")
        >>> logger.debug("Decoded API error", type="invalid_request_error")
    """

    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _level: ClassVar[LogLevel | None] = None
    _handler: ClassVar[logging.Handler | None] = None

    @classmethod
    def _current_level(cls) -> LogLevel:
        if cls._level is None:
            cls._level = LogLevel.from_env()
        return cls._level

    @classmethod
    def configure(
        cls,
        level: LogLevel = LogLevel.WARNING,
        format: str = "text",
        stream: Any = None,
        masker: SensitiveDataMasker | None = None,
    ) -> None:
        """Configure all package loggers.

        Args:
            level: Log level
            format: Output format ('json' or 'text')
            stream: Output stream (default: stderr)
            masker: Sensitive data masker
        """
        cls._level = level
        formatter: logging.Formatter = (
            JsonFormatter(masker=masker) if format == "json" else TextFormatter(masker=masker)
        )
        cls._handler = logging.StreamHandler(stream or sys.stderr)
        cls._handler.setFormatter(formatter)
        cls._handler.setLevel(level.to_logging_level())

        for logger in cls._loggers.values():
            logger.handlers.clear()
            logger.addHandler(cls._handler)
            logger.setLevel(level.to_logging_level())

    @classmethod
    def get_logger(cls, name: str) -> ErrorsLogger:
        """Get or create a logger.

        Args:
            name: Logger name

        Returns:
            Logger instance
        """
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            logger.setLevel(cls._current_level().to_logging_level())
            if cls._handler:
                logger.handlers.clear()
                logger.addHandler(cls._handler)
            elif not logger.handlers:
                handler = logging.StreamHandler(sys.stderr)
                handler.setFormatter(TextFormatter())
                logger.addHandler(handler)
            logger.propagate = False
            cls._loggers[name] = logger

        return cls(cls._loggers[name])

    def __init__(self, logger: logging.Logger) -> None:
        """Initialize with underlying logger."""
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, msg: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Internal log method; keyword arguments become structured fields."""
        extra = {"extra_fields": kwargs} if kwargs else {}
        self._logger.log(level, msg, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message.

        Args:
            msg: Log message
            **kwargs: Structured fields attached to the record
        """
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Log error message.

        Args:
            msg: Log message
            exc_info: Whether to attach the current exception traceback
            **kwargs: Structured fields attached to the record
        """
        self._log(logging.ERROR, msg, exc_info=exc_info, **kwargs)


def get_logger(name: str) -> ErrorsLogger:
    """Get a logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return ErrorsLogger.get_logger(name)
