"""Async HTTP client construction for transports and log delivery.

Purpose:
    Provide a single place that builds ``httpx.AsyncClient`` instances so that
    timeouts derive from :mod:`ai_stream.config.defaults` and no numeric
    literals are scattered across transports.

External dependencies:
    - ``httpx`` for the underlying asynchronous HTTP client.

Timeout strategy:
    - ``"stream"`` clients have no read timeout: an event stream may stay idle
      indefinitely between server pushes. Connect timeouts still apply.
    - Every other purpose uses the bounded request timeout.

Lifecycle & cleanup:
    - Clients are not pooled. An ``AsyncClient`` is bound to the event loop it
      first runs on, so each transport lifecycle owns its client and closes it
      via ``async with``.
    - ``transport`` accepts any ``httpx.AsyncBaseTransport``; tests pass an
      ``httpx.MockTransport`` here.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ...config.defaults import (
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
)

STREAM_PURPOSE = "stream"


def build_timeout(purpose: str) -> httpx.Timeout:
    """Return the timeout policy for ``purpose``."""
    if purpose == STREAM_PURPOSE:
        return httpx.Timeout(DEFAULT_CONNECT_TIMEOUT_SECONDS, read=None)
    return httpx.Timeout(DEFAULT_REQUEST_TIMEOUT_SECONDS, connect=DEFAULT_CONNECT_TIMEOUT_SECONDS)


def build_async_client(
    purpose: str,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` configured for ``purpose``.

    Parameters:
        purpose: Short discriminator selecting the timeout policy
            (``"stream"``, ``"request"``, ``"logs"``).
        transport: Optional custom transport (mocking, proxies).

    Returns:
        A new client; the caller is responsible for closing it.
    """
    return httpx.AsyncClient(timeout=build_timeout(purpose), transport=transport)


__all__ = ["build_async_client", "build_timeout", "STREAM_PURPOSE"]
