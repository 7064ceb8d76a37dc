"""Tests for telemetry module."""

import io
import json
from collections.abc import Iterator

import pytest

from ai_lib_errors.errors import DecodeError, decode_error_response
from ai_lib_errors.telemetry import (
    ErrorsLogger,
    LogLevel,
    SensitiveDataMasker,
    get_logger,
)


@pytest.fixture
def log_stream() -> Iterator[io.StringIO]:
    stream = io.StringIO()
    yield stream
    ErrorsLogger.configure(level=LogLevel.WARNING)


class TestLogLevel:
    """Tests for LogLevel."""

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AI_LIB_ERRORS_LOG_LEVEL", "debug")
        assert LogLevel.from_env() == LogLevel.DEBUG

    def test_from_env_invalid(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AI_LIB_ERRORS_LOG_LEVEL", "chatty")
        assert LogLevel.from_env() == LogLevel.WARNING

    def test_from_env_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("AI_LIB_ERRORS_LOG_LEVEL", raising=False)
        assert LogLevel.from_env(LogLevel.ERROR) == LogLevel.ERROR


class TestSensitiveDataMasker:
    """Tests for SensitiveDataMasker."""

    def test_mask_api_key(self) -> None:
        """Test masking keys echoed in an invalid_api_key message."""
        masker = SensitiveDataMasker()
        text = "Incorrect API key provided: sk-proj-1234567890abcdefghijklmnop."
        masked = masker.mask(text)
        assert "1234567890abcdef" not in masked
        assert "REDACTED" in masked

    def test_mask_azure_header(self) -> None:
        masked = SensitiveDataMasker().mask("api-key: 0123456789abcdef")
        assert "0123456789abcdef" not in masked

    def test_mask_bearer_token(self) -> None:
        masked = SensitiveDataMasker().mask("Authorization: Bearer secret-token-123")
        assert "secret-token-123" not in masked

    def test_mask_dict(self) -> None:
        masker = SensitiveDataMasker()
        masked = masker.mask_dict(
            {"api_key": "secret", "field": "message", "nested": {"token": "t"}}
        )
        assert masked["api_key"] == "***REDACTED***"
        assert masked["field"] == "message"
        assert masked["nested"]["token"] == "***REDACTED***"


class TestErrorsLogger:
    """Tests for ErrorsLogger."""

    def test_get_logger(self) -> None:
        logger = get_logger("ai_lib_errors.test")
        assert logger.name == "ai_lib_errors.test"

    def test_json_output(self, log_stream: io.StringIO) -> None:
        ErrorsLogger.configure(level=LogLevel.DEBUG, format="json", stream=log_stream)
        get_logger("ai_lib_errors.test.json").info("Decoded", code=429, api_key="sk-x")

        record = json.loads(log_stream.getvalue().splitlines()[-1])
        assert record["level"] == "INFO"
        assert record["message"] == "Decoded"
        assert record["code"] == 429
        assert record["api_key"] == "***REDACTED***"

    def test_text_output(self, log_stream: io.StringIO) -> None:
        ErrorsLogger.configure(level=LogLevel.DEBUG, format="text", stream=log_stream)
        get_logger("ai_lib_errors.test.text").warning("Odd body", status_code=502)

        line = log_stream.getvalue().splitlines()[-1]
        assert "WARNING" in line
        assert "Odd body" in line
        assert "status_code=502" in line

    def test_level_filters(self, log_stream: io.StringIO) -> None:
        ErrorsLogger.configure(level=LogLevel.ERROR, stream=log_stream)
        get_logger("ai_lib_errors.test.quiet").info("hidden")
        assert log_stream.getvalue() == ""

    def test_decoder_logs_failures(self, log_stream: io.StringIO) -> None:
        """Test decode failures are logged with the offending field."""
        ErrorsLogger.configure(level=LogLevel.DEBUG, format="json", stream=log_stream)
        with pytest.raises(DecodeError):
            decode_error_response(b'{"error": {"message": 1}}')

        records = [json.loads(line) for line in log_stream.getvalue().splitlines()]
        assert any(r.get("field") == "message" for r in records)
