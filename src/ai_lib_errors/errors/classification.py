"""错误分类查询：在异常链中定位 HTTP 状态码与限流信号。

Variant-agnostic queries over provider errors.

Both queries look for the HTTPErrorInfo capability anywhere in an exception
chain, so a caller can wrap an APIError or RequestError in its own exception
(``raise MyError(...) from api_err``) and still classify it. A structured
APIError anywhere in the chain takes precedence over other carriers, such as
a RequestError that wraps it.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING

from ai_lib_errors.errors.api_error import APIError
from ai_lib_errors.errors.base import HTTPErrorInfo

if TYPE_CHECKING:
    from collections.abc import Iterator

HTTP_TOO_MANY_REQUESTS = int(HTTPStatus.TOO_MANY_REQUESTS)


def iter_error_chain(err: BaseException | None) -> Iterator[BaseException]:
    """Yield ``err`` and every exception it wraps.

    Follows ``__cause__``, then ``__context__`` unless it was suppressed
    with ``raise ... from``. Cycles are cut.
    """
    seen: set[int] = set()
    current = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None


def _has_status(exc: BaseException) -> bool:
    if not isinstance(exc, HTTPErrorInfo):
        return False
    status = exc.http_status_code
    return isinstance(status, int) and not isinstance(status, bool)


def _http_errors(err: BaseException | None) -> Iterator[HTTPErrorInfo]:
    """Yield HTTP carriers in the chain, APIErrors first."""
    carriers = [exc for exc in iter_error_chain(err) if _has_status(exc)]
    yield from (exc for exc in carriers if isinstance(exc, APIError))
    yield from (exc for exc in carriers if not isinstance(exc, APIError))


def http_status(err: BaseException | None) -> int:
    """Return the HTTP status code that caused ``err``.

    Args:
        err: Any exception, possibly wrapping an APIError or RequestError

    Returns:
        Status code of the first APIError in the chain, else of the first
        other HTTP-sourced error, or 0 if the error was not caused by an
        HTTP response
    """
    for info in _http_errors(err):
        return info.http_status_code
    return 0


def is_rate_limited(err: BaseException | None) -> tuple[bool, str]:
    """Check whether ``err`` is a 429 Too Many Requests response.

    Args:
        err: Any exception, possibly wrapping an APIError or RequestError

    Returns:
        ``(True, retry_after)`` with the verbatim Retry-After header value,
        or ``(False, "")``

    Example:
        >>> limited, retry_after = is_rate_limited(err)
        >>> if limited:
        ...     schedule_retry(retry_after)
    """
    for info in _http_errors(err):
        if info.http_status_code == HTTP_TOO_MANY_REQUESTS:
            return True, info.http_retry_after
    return False, ""
