"""容错解码器：将形态不一的错误信封解码为 APIError。

Tolerant decoder for provider error envelopes.

The error schema is provider-controlled and has drifted over time: Azure adds
``innererror``, some error types send ``message`` as a list of validation
messages, ``code`` is an integer for some errors and a string for others.
Fields that are absent decode to their zero value; fields that are present
with the wrong shape abort the decode.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import Strict, StrictInt, StrictStr, TypeAdapter, ValidationError

from ai_lib_errors.errors.api_error import APIError, ErrorResponse, InnerError
from ai_lib_errors.errors.base import DecodeError
from ai_lib_errors.telemetry.logger import get_logger

logger = get_logger(__name__)

MESSAGE_SEPARATOR = ", "

_STR: TypeAdapter[str] = TypeAdapter(StrictStr)
_STR_LIST: TypeAdapter[list[str]] = TypeAdapter(Annotated[list[StrictStr], Strict()])
_OPT_STR: TypeAdapter[str | None] = TypeAdapter(StrictStr | None)
_INT: TypeAdapter[int] = TypeAdapter(StrictInt)


def _fail(msg: str, field: str | None, value: Any) -> DecodeError:
    logger.debug("Error envelope decode failed", field=field, reason=msg)
    return DecodeError(msg, field=field, actual=value)


def _decode_message(raw: Mapping[str, Any]) -> str:
    if "message" not in raw:
        raise _fail("error object has no 'message'", "message", None)

    value = raw["message"]
    if value is None:
        return ""

    try:
        return _STR.validate_python(value)
    except ValidationError:
        pass

    # Validation errors for function-call parameters arrive as a list
    try:
        messages = _STR_LIST.validate_python(value)
    except ValidationError as e:
        raise _fail(
            "'message' must be a string or a list of strings", "message", value
        ) from e
    return MESSAGE_SEPARATOR.join(messages)


def _decode_type(raw: Mapping[str, Any]) -> str:
    value = raw.get("type")
    if value is None:
        return ""
    try:
        return _STR.validate_python(value)
    except ValidationError as e:
        raise _fail("'type' must be a string", "type", value) from e


def _decode_param(raw: Mapping[str, Any]) -> str | None:
    if "param" not in raw:
        return None
    value = raw["param"]
    try:
        return _OPT_STR.validate_python(value)
    except ValidationError as e:
        raise _fail("'param' must be a string or null", "param", value) from e


def _decode_inner_error(raw: Mapping[str, Any]) -> InnerError | None:
    value = raw.get("innererror")
    if value is None:
        return None
    try:
        return InnerError.model_validate(value)
    except ValidationError as e:
        raise _fail("'innererror' is malformed", "innererror", value) from e


def _decode_code(raw: Mapping[str, Any]) -> Any:
    value = raw.get("code")
    if value is None:
        return None
    try:
        return _INT.validate_python(value)
    except ValidationError:
        # Strings, float literals and anything else pass through as sent
        return value


def decode_api_error(raw: Any) -> APIError:
    """Decode the ``error`` object of an envelope into an APIError.

    Args:
        raw: Parsed JSON value of the ``error`` member

    Returns:
        APIError with HTTP fields unset

    Raises:
        DecodeError: If ``raw`` is not an object, ``message`` is missing or
            is neither a string nor a list of strings, or an optional field
            is present with the wrong shape
    """
    if not isinstance(raw, Mapping):
        raise _fail("error member is not a JSON object", "error", raw)

    message = _decode_message(raw)
    error_type = _decode_type(raw)
    inner_error = _decode_inner_error(raw)
    param = _decode_param(raw)
    code = _decode_code(raw)

    logger.debug("Decoded API error", type=error_type, code=code)
    return APIError(
        message,
        code=code,
        param=param,
        type=error_type,
        inner_error=inner_error,
    )


def decode_error_response(body: bytes | str) -> ErrorResponse:
    """Decode a failed response body into an ErrorResponse.

    Args:
        body: Raw response body

    Returns:
        ErrorResponse; ``error`` is None when the body carries no error object

    Raises:
        DecodeError: If the body is not a JSON object or its error object
            cannot be decoded
    """
    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError and UnicodeDecodeError are ValueErrors; oversized
        # integer literals raise a bare ValueError, deep nesting RecursionError
        raise _fail("error response body is not valid JSON", None, None) from e

    if not isinstance(data, dict):
        raise _fail("error response body is not a JSON object", None, data)

    raw_error = data.get("error")
    if raw_error is None:
        return ErrorResponse()
    return ErrorResponse(error=decode_api_error(raw_error))
