#!/usr/bin/env python3
"""
Error classification example.

Sends a chat completion with httpx and turns a failed response into an
APIError or RequestError, then asks whether the caller should back off.

Usage:
    export OPENAI_API_KEY="your-api-key"
    python examples/classify_errors.py
"""

import asyncio
import os

import httpx

from ai_lib_errors import (
    APIError,
    error_from_httpx_response,
    http_status,
    is_rate_limited,
    wrap_transport_error,
)


async def chat(prompt: str) -> str:
    """Send one chat completion, raising a classified error on failure."""
    headers = {"Authorization": f"Bearer {os.getenv('OPENAI_API_KEY', '')}"}
    payload = {"model": "gpt-4o-mini", "messages": [{"role": "user", "content": prompt}]}

    async with httpx.AsyncClient(base_url="https://api.openai.com/v1", timeout=30.0) as client:
        try:
            response = await client.post("/chat/completions", json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise wrap_transport_error(e) from e

        if response.status_code >= 400:
            raise error_from_httpx_response(response)

        return response.json()["choices"][0]["message"]["content"]


async def main() -> None:
    try:
        print(await chat("Say hello in one word."))
    except Exception as e:
        print(f"Failed: {e}")
        print(f"HTTP status: {http_status(e)}")

        limited, retry_after = is_rate_limited(e)
        if limited:
            print(f"Rate limited, retry after: {retry_after or 'unspecified'}")

        if isinstance(e, APIError):
            print(f"Provider code: {e.code!r}, type: {e.type!r}, param: {e.param!r}")


if __name__ == "__main__":
    asyncio.run(main())
