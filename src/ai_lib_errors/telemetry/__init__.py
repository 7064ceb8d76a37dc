"""
Telemetry for ai-lib-errors: structured, credential-masking logging.
"""

from ai_lib_errors.telemetry.logger import (
    ErrorsLogger,
    JsonFormatter,
    LogLevel,
    SensitiveDataMasker,
    TextFormatter,
    get_logger,
)

__all__ = [
    "ErrorsLogger",
    "JsonFormatter",
    "LogLevel",
    "SensitiveDataMasker",
    "TextFormatter",
    "get_logger",
]
