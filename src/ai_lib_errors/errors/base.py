"""错误基类：提供根异常、结构化错误上下文与 HTTP 能力协议。

Base error classes for ai-lib-errors.

Provides the root exception, the structured diagnostic context attached to
every error, and the capability protocol shared by the HTTP-sourced variants:

- AiLibErrorsError: Base class for all library errors
- DecodeError: Error envelope body violates the minimal required shape
- HTTPErrorInfo: "Carries an HTTP status code and a Retry-After hint"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass
class ErrorContext:
    """Structured error context for diagnostics."""

    field_path: str | None = None
    """Wire key that failed to decode (e.g., 'message')"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the error"""

    source: str | None = None
    """Error source (e.g., 'decode', 'transport')"""

    hint: str | None = None

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.field_path:
            parts.append(f"at '{self.field_path}'")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class AiLibErrorsError(Exception):
    """Base class for all ai-lib-errors exceptions.

    Attributes:
        message: Human-readable error message
        context: Structured error context
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        super().__init__(self.describe())

    def describe(self) -> str:
        """Return the human-readable description of this error."""
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message

    def __str__(self) -> str:
        return self.describe()

    def unwrap(self) -> BaseException | None:
        """Return the underlying cause, if any."""
        return self.__cause__


class DecodeError(AiLibErrorsError):
    """The error envelope could not be decoded.

    Raised when:
    - The body is not valid JSON
    - The body (or its ``error`` member) is not a JSON object
    - ``message`` is neither a string nor a list of strings
    - An optional field is present with the wrong shape
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        actual: Any = None,
    ) -> None:
        ctx = ErrorContext(source="decode", field_path=field)
        if actual is not None:
            ctx.details["actual_type"] = type(actual).__name__
        super().__init__(message, ctx)
        self.field = field


@runtime_checkable
class HTTPErrorInfo(Protocol):
    """Capability of an error that was produced from an HTTP response.

    ``http_status_code`` is 0 when the error never went through an HTTP
    round trip. ``http_retry_after`` is the verbatim ``Retry-After`` header
    value, or an empty string.
    """

    http_status_code: int
    http_retry_after: str
