"""Root pytest fixtures for ai-lib-errors tests."""

from __future__ import annotations

import json
from typing import Any

import pytest


@pytest.fixture
def rate_limit_body() -> bytes:
    """OpenAI 429 body as sent for requests-per-minute limits."""
    return json.dumps(
        {
            "error": {
                "message": "Rate limit reached for gpt-4o in organization org-abc on requests per min.",
                "type": "requests",
                "param": None,
                "code": "rate_limit_exceeded",
            }
        }
    ).encode()


@pytest.fixture
def content_filter_payload() -> dict[str, Any]:
    """Azure OpenAI 400 error object for a filtered prompt."""
    return {
        "message": "The response was filtered due to the prompt triggering content management policy.",
        "type": None,
        "param": "prompt",
        "code": "content_filter",
        "status": 400,
        "innererror": {
            "code": "ResponsibleAIPolicyViolation",
            "content_filter_result": {
                "hate": {"filtered": True, "severity": "high"},
                "self_harm": {"filtered": False, "severity": "safe"},
                "sexual": {"filtered": False, "severity": "safe"},
                "violence": {"filtered": False, "severity": "safe"},
            },
        },
    }


@pytest.fixture
def content_filter_body(content_filter_payload: dict[str, Any]) -> bytes:
    return json.dumps({"error": content_filter_payload}).encode()
