"""错误体系：API 错误模型、容错解码器与分类查询。

Error model, tolerant decoder and classification for provider API failures.
"""

from ai_lib_errors.errors.api_error import (
    APIError,
    ErrorResponse,
    InnerError,
    RequestError,
)
from ai_lib_errors.errors.base import (
    AiLibErrorsError,
    DecodeError,
    ErrorContext,
    HTTPErrorInfo,
)
from ai_lib_errors.errors.classification import (
    HTTP_TOO_MANY_REQUESTS,
    http_status,
    is_rate_limited,
    iter_error_chain,
)
from ai_lib_errors.errors.decode import (
    MESSAGE_SEPARATOR,
    decode_api_error,
    decode_error_response,
)
from ai_lib_errors.errors.response import (
    UnexpectedBodyError,
    error_from_httpx_response,
    error_from_response,
    retry_after_from_headers,
    wrap_transport_error,
)

__all__ = [
    # Error model
    "APIError",
    "AiLibErrorsError",
    "DecodeError",
    "ErrorContext",
    "ErrorResponse",
    "HTTPErrorInfo",
    "InnerError",
    "RequestError",
    "UnexpectedBodyError",
    # Decoding
    "MESSAGE_SEPARATOR",
    "decode_api_error",
    "decode_error_response",
    # Response adapter
    "error_from_httpx_response",
    "error_from_response",
    "retry_after_from_headers",
    "wrap_transport_error",
    # Classification
    "HTTP_TOO_MANY_REQUESTS",
    "http_status",
    "is_rate_limited",
    "iter_error_chain",
]
