"""
Error model for provider API failures.

Two alternatives describe any failed call:

- APIError: the provider answered with a structured error envelope
- RequestError: no structured error was obtained (transport fault,
  undecodable body, envelope without an ``error`` object)

InnerError is only sent by the enterprise-hosted (Azure OpenAI) variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    ValidationInfo,
    field_validator,
)

from ai_lib_errors.errors.base import AiLibErrorsError, ErrorContext


class InnerError(BaseModel):
    """Azure content-filtering detail attached to an API error.

    ``content_filter_results`` is passed through untouched; its schema
    belongs to whoever consumes it.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    code: StrictStr = Field(default="", description="Inner error code")
    content_filter_results: dict[str, Any] = Field(
        default_factory=dict,
        alias="content_filter_result",
        description="Opaque content filter result",
    )

    @field_validator("code", "content_filter_results", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any, info: ValidationInfo) -> Any:
        # JSON null leaves the zero value in place
        if value is None:
            return "" if info.field_name == "code" else {}
        return value

    def to_dict(self) -> dict[str, Any]:
        """Encode back to the wire shape."""
        data = self.model_dump(by_alias=True)
        if not data.get("code"):
            data.pop("code", None)
        return data


class APIError(AiLibErrorsError):
    """Error information returned by the provider API.

    Attributes:
        code: Provider error code. An ``int`` when the wire carried an integer
            literal, otherwise the decoded JSON value as sent (usually ``str``)
        message: Human-readable description, always a single string
        param: Offending request parameter, if any
        type: Provider error category, empty when absent
        http_status_code: Status of the HTTP response (0 if none)
        http_retry_after: Verbatim ``Retry-After`` header value
        inner_error: Azure content-filter detail

    Example:
        >>> err = APIError("Rate limit reached", type="requests", code=429)
        >>> str(err)
        'Rate limit reached'
        >>> str(err.with_http(429, "20"))
        'error, status code: 429, message: Rate limit reached'
    """

    def __init__(
        self,
        message: str,
        *,
        code: Any = None,
        param: str | None = None,
        type: str = "",
        http_status_code: int = 0,
        http_retry_after: str = "",
        inner_error: InnerError | None = None,
    ) -> None:
        self.code = code
        self.param = param
        self.type = type
        self.http_status_code = http_status_code
        self.http_retry_after = http_retry_after
        self.inner_error = inner_error

        ctx = ErrorContext(source="api")
        if type:
            ctx.details["type"] = type
        if code is not None:
            ctx.details["code"] = code
        super().__init__(message, ctx)

    def describe(self) -> str:
        # Without a round trip the status code means nothing
        if self.http_status_code > 0:
            return f"error, status code: {self.http_status_code}, message: {self.message}"
        return self.message

    def unwrap(self) -> BaseException | None:
        """API errors are terminal; there is no underlying cause."""
        return None

    def with_http(self, status_code: int, retry_after: str = "") -> APIError:
        """Return a copy carrying the HTTP status and Retry-After hint."""
        return APIError(
            self.message,
            code=self.code,
            param=self.param,
            type=self.type,
            http_status_code=status_code,
            http_retry_after=retry_after,
            inner_error=self.inner_error,
        )

    def to_dict(self) -> dict[str, Any]:
        """Encode back to the wire shape (HTTP fields are not part of it)."""
        data: dict[str, Any] = {}
        if self.code is not None:
            data["code"] = self.code
        data["message"] = self.message
        if self.param is not None:
            data["param"] = self.param
        data["type"] = self.type
        if self.inner_error is not None:
            data["innererror"] = self.inner_error.to_dict()
        return data

    def __repr__(self) -> str:
        return (
            f"APIError(message={self.message!r}, code={self.code!r}, "
            f"type={self.type!r}, http_status_code={self.http_status_code})"
        )


class RequestError(AiLibErrorsError):
    """Generic request failure that produced no structured API error.

    The wrapped ``cause`` is also installed as ``__cause__`` so that
    tracebacks and chain traversal see it.

    Example:
        >>> err = RequestError(ValueError("boom"), http_status_code=502)
        >>> str(err)
        'error, status code: 502, message: boom'
    """

    def __init__(
        self,
        cause: BaseException | None = None,
        *,
        http_status_code: int = 0,
        http_retry_after: str = "",
    ) -> None:
        self.cause = cause
        self.http_status_code = http_status_code
        self.http_retry_after = http_retry_after

        ctx = ErrorContext(source="request")
        ctx.details["status_code"] = http_status_code
        if cause is not None:
            ctx.details["cause_type"] = type(cause).__name__
        super().__init__(str(cause) if cause is not None else "", ctx)
        self.__cause__ = cause

    def describe(self) -> str:
        return f"error, status code: {self.http_status_code}, message: {self.message}"

    def unwrap(self) -> BaseException | None:
        """Return the wrapped cause."""
        return self.cause

    def __repr__(self) -> str:
        return (
            f"RequestError(http_status_code={self.http_status_code}, "
            f"cause={self.cause!r})"
        )


@dataclass(frozen=True)
class ErrorResponse:
    """Wire envelope of a failed response: ``{"error": {...}}``."""

    error: APIError | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.error is None:
            return {}
        return {"error": self.error.to_dict()}
