"""Tests for HTTP status extraction and rate-limit detection."""

from ai_lib_errors.errors import (
    APIError,
    RequestError,
    http_status,
    is_rate_limited,
    iter_error_chain,
)


class ClientError(Exception):
    """Caller-side wrapper used to build exception chains."""


def _wrap(inner: BaseException) -> ClientError:
    try:
        raise ClientError("chat completion failed") from inner
    except ClientError as e:
        return e


class TestHttpStatus:
    """Tests for http_status."""

    def test_api_error(self) -> None:
        assert http_status(APIError("slow down", http_status_code=429)) == 429

    def test_request_error(self) -> None:
        assert http_status(RequestError(OSError("reset"), http_status_code=503)) == 503

    def test_plain_error(self) -> None:
        assert http_status(ValueError("nope")) == 0

    def test_none(self) -> None:
        assert http_status(None) == 0

    def test_decoded_without_round_trip(self) -> None:
        assert http_status(APIError("x")) == 0

    def test_wrapped_with_from(self) -> None:
        outer = _wrap(APIError("x", http_status_code=404))
        assert http_status(outer) == 404

    def test_wrapped_twice(self) -> None:
        outer = _wrap(_wrap(RequestError(None, http_status_code=500)))
        assert http_status(outer) == 500

    def test_implicit_context(self) -> None:
        """Test errors raised while handling an API error are still classified."""
        try:
            try:
                raise APIError("x", http_status_code=400)
            except APIError:
                raise KeyError("choices")  # noqa: B904
        except KeyError as e:
            outer = e
        assert http_status(outer) == 400

    def test_suppressed_context(self) -> None:
        try:
            try:
                raise APIError("x", http_status_code=400)
            except APIError:
                raise KeyError("choices") from None
        except KeyError as e:
            outer = e
        assert http_status(outer) == 0

    def test_api_error_wins_over_wrapping_request_error(self) -> None:
        """Test the structured error is preferred wherever it sits in the chain."""
        inner = APIError("inner", http_status_code=429)
        outer = _wrap(RequestError(inner, http_status_code=500))
        assert http_status(outer) == 429

    def test_first_request_error_without_api_error(self) -> None:
        inner = RequestError(None, http_status_code=503)
        outer = RequestError(inner, http_status_code=502)
        assert http_status(outer) == 502

    def test_non_integer_status_is_ignored(self) -> None:
        """Test carriers without a usable status do not leak into the result."""

        class LegacyError(Exception):
            http_status_code = None
            http_retry_after = ""

        assert http_status(LegacyError()) == 0
        assert http_status(RequestError(LegacyError(), http_status_code=504)) == 504
        assert is_rate_limited(LegacyError()) == (False, "")

    def test_duck_typed_carrier(self) -> None:
        """Test matching is by capability, not by class."""

        class ProxyError(Exception):
            http_status_code = 407
            http_retry_after = ""

        assert http_status(_wrap(ProxyError())) == 407


class TestIsRateLimited:
    """Tests for is_rate_limited."""

    def test_request_error_429(self) -> None:
        err = RequestError(None, http_status_code=429, http_retry_after="30")
        assert is_rate_limited(err) == (True, "30")

    def test_request_error_500(self) -> None:
        err = RequestError(None, http_status_code=500, http_retry_after="30")
        assert is_rate_limited(err) == (False, "")

    def test_api_error_429(self) -> None:
        err = APIError("Rate limit reached", http_status_code=429, http_retry_after="20")
        assert is_rate_limited(err) == (True, "20")

    def test_429_without_retry_after(self) -> None:
        assert is_rate_limited(APIError("x", http_status_code=429)) == (True, "")

    def test_plain_error(self) -> None:
        assert is_rate_limited(RuntimeError("x")) == (False, "")
        assert is_rate_limited(None) == (False, "")

    def test_wrapped(self) -> None:
        when = "Wed, 21 Oct 2026 07:28:00 GMT"
        outer = _wrap(APIError("x", http_status_code=429, http_retry_after=when))
        assert is_rate_limited(outer) == (True, when)

    def test_examines_both_variants(self) -> None:
        """Test a 429 deeper in the chain is found behind another carrier."""
        inner = APIError("x", http_status_code=429, http_retry_after="5")
        outer = RequestError(inner, http_status_code=500)
        assert is_rate_limited(outer) == (True, "5")


class TestIterErrorChain:
    """Tests for iter_error_chain."""

    def test_order(self) -> None:
        root = OSError("reset")
        middle = RequestError(root, http_status_code=502)
        outer = _wrap(middle)
        assert list(iter_error_chain(outer)) == [outer, middle, root]

    def test_cycle_terminates(self) -> None:
        a = ValueError("a")
        b = ValueError("b")
        a.__cause__ = b
        b.__cause__ = a
        assert list(iter_error_chain(a)) == [a, b]
        assert http_status(a) == 0

    def test_none(self) -> None:
        assert list(iter_error_chain(None)) == []
