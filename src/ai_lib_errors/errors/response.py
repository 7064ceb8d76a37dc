"""
Turns an already-received failed HTTP response into an error value.

The transport is not involved here: callers hand over the status code,
headers and body bytes they already have (or an ``httpx.Response`` whose
content was read) and get back an APIError or a RequestError.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from contextlib import suppress

import httpx

from ai_lib_errors.errors.api_error import APIError, RequestError
from ai_lib_errors.errors.base import AiLibErrorsError, DecodeError, ErrorContext
from ai_lib_errors.errors.decode import decode_error_response
from ai_lib_errors.telemetry.logger import get_logger

logger = get_logger(__name__)

RETRY_AFTER_HEADER = "Retry-After"

_BODY_EXCERPT_ENV = "AI_LIB_ERRORS_BODY_EXCERPT"
_DEFAULT_BODY_EXCERPT = 256


class UnexpectedBodyError(AiLibErrorsError):
    """A failed response whose body is valid JSON but has no error object."""

    def __init__(self, excerpt: str, *, truncated: bool = False) -> None:
        ctx = ErrorContext(details={"truncated": truncated})
        suffix = "..." if truncated else ""
        super().__init__(f"no error object in response body: {excerpt}{suffix}", ctx)
        self.excerpt = excerpt
        self.truncated = truncated


def _body_excerpt_limit(explicit: int | None) -> int:
    if explicit is not None:
        return max(explicit, 0)
    env_value = os.getenv(_BODY_EXCERPT_ENV)
    if env_value:
        with suppress(ValueError):
            return max(int(env_value), 0)
    return _DEFAULT_BODY_EXCERPT


def retry_after_from_headers(headers: Mapping[str, str] | None) -> str:
    """Return the verbatim ``Retry-After`` value, matching the name case-insensitively."""
    if not headers:
        return ""
    value = headers.get(RETRY_AFTER_HEADER)
    if value is None:
        wanted = RETRY_AFTER_HEADER.lower()
        for name, candidate in headers.items():
            if name.lower() == wanted:
                value = candidate
                break
    return value or ""


def error_from_response(
    status_code: int,
    headers: Mapping[str, str] | None,
    body: bytes | str,
    *,
    body_excerpt: int | None = None,
) -> APIError | RequestError:
    """Build the error value for a failed HTTP response.

    Args:
        status_code: Response status code
        headers: Response headers
        body: Response body
        body_excerpt: Max body characters quoted when the body has no error
            object (default: ``AI_LIB_ERRORS_BODY_EXCERPT`` or 256)

    Returns:
        APIError carrying the HTTP fields when the body holds a structured
        error; otherwise a RequestError wrapping the reason

    Example:
        >>> err = error_from_response(429, {"retry-after": "20"}, body)
        >>> raise err
    """
    retry_after = retry_after_from_headers(headers)

    try:
        envelope = decode_error_response(body)
    except DecodeError as e:
        logger.debug("Undecodable error body", status_code=status_code, reason=e.message)
        return RequestError(e, http_status_code=status_code, http_retry_after=retry_after)

    if envelope.error is None:
        text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
        limit = _body_excerpt_limit(body_excerpt)
        cause = UnexpectedBodyError(text[:limit], truncated=len(text) > limit)
        logger.debug("Error body without error object", status_code=status_code)
        return RequestError(cause, http_status_code=status_code, http_retry_after=retry_after)

    return envelope.error.with_http(status_code, retry_after)


def error_from_httpx_response(
    response: httpx.Response,
    *,
    body_excerpt: int | None = None,
) -> APIError | RequestError:
    """Build the error value from an httpx response whose body was read.

    For streamed responses call ``response.read()`` (or ``aread()``) first.
    """
    return error_from_response(
        response.status_code,
        response.headers,
        response.content,
        body_excerpt=body_excerpt,
    )


def wrap_transport_error(
    exc: BaseException,
    *,
    status_code: int = 0,
    retry_after: str = "",
) -> RequestError:
    """Wrap a transport fault (e.g. ``httpx.HTTPError``) as a RequestError.

    ``httpx.HTTPStatusError`` from ``raise_for_status()`` already carries the
    response, so its status and Retry-After hint are used when not given.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        status_code = status_code or exc.response.status_code
        retry_after = retry_after or retry_after_from_headers(exc.response.headers)
    return RequestError(exc, http_status_code=status_code, http_retry_after=retry_after)
