"""AI 厂商错误响应的容错解码与分类。

ai-lib-errors: tolerant decoding and classification of AI provider API errors.

Decodes the loosely-typed ``{"error": {...}}`` envelope sent by OpenAI and
Azure OpenAI into typed error values, and answers "what HTTP status caused
this?" and "was this rate limited?" for any exception chain.
"""
from __future__ import annotations

from ai_lib_errors.errors import (
    AiLibErrorsError,
    APIError,
    DecodeError,
    ErrorResponse,
    InnerError,
    RequestError,
    decode_api_error,
    decode_error_response,
    error_from_httpx_response,
    error_from_response,
    http_status,
    is_rate_limited,
    wrap_transport_error,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "APIError",
    "AiLibErrorsError",
    "DecodeError",
    "ErrorResponse",
    "InnerError",
    "RequestError",
    # Decoding
    "decode_api_error",
    "decode_error_response",
    "error_from_httpx_response",
    "error_from_response",
    "wrap_transport_error",
    # Classification
    "http_status",
    "is_rate_limited",
    # Version
    "__version__",
]
