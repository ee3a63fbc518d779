"""Unit tests for the async httpx client factory.

Covers:
- Stream purpose disables the read timeout but keeps the connect timeout.
- Other purposes use the bounded request timeout.
- Each call builds a fresh client (no pooling across event loops).
- A custom transport is used for requests.
"""
from __future__ import annotations

import asyncio

import httpx

from ai_stream.base.http import STREAM_PURPOSE, build_async_client, build_timeout
from ai_stream.config.defaults import (
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
)


def test_stream_timeout_has_no_read_limit():
    timeout = build_timeout(STREAM_PURPOSE)
    assert timeout.read is None, "Event streams may idle between pushes"
    assert timeout.connect == DEFAULT_CONNECT_TIMEOUT_SECONDS


def test_request_timeout_is_bounded():
    timeout = build_timeout("request")
    assert timeout.read == DEFAULT_REQUEST_TIMEOUT_SECONDS
    assert timeout.connect == DEFAULT_CONNECT_TIMEOUT_SECONDS


def test_clients_are_not_pooled():
    async def _build():
        c1 = build_async_client("request")
        c2 = build_async_client("request")
        try:
            return c1 is c2
        finally:
            await c1.aclose()
            await c2.aclose()

    assert asyncio.run(_build()) is False, "Each transport lifecycle owns its client"


def test_custom_transport_is_used():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(204)

    async def _call():
        async with build_async_client("logs", transport=httpx.MockTransport(handler)) as client:
            response = await client.get("http://collector/x")
            return response.status_code

    assert asyncio.run(_call()) == 204
    assert seen == ["http://collector/x"]
