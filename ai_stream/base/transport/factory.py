"""Default transport construction used by the connection controller."""
from __future__ import annotations

from typing import Callable, Optional

import httpx

from ...config.defaults import DEFAULT_RECONNECT_INTERVAL_SECONDS
from .event_source import EventSourceTransport
from .single_request import SingleRequestTransport
from .transport_base import BaseTransport, TransportKind

TransportFactory = Callable[[TransportKind], BaseTransport]


def default_transport_factory(
    kind: TransportKind,
    *,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
    reconnect_interval: float = DEFAULT_RECONNECT_INTERVAL_SECONDS,
) -> BaseTransport:
    """Return a fresh transport for ``kind``.

    ``http_transport`` is passed to the underlying ``httpx.AsyncClient``
    (tests inject ``httpx.MockTransport``).
    """
    if kind is TransportKind.STREAMING:
        return EventSourceTransport(http_transport=http_transport, reconnect_interval=reconnect_interval)
    if kind is TransportKind.SINGLE_SHOT:
        return SingleRequestTransport(http_transport=http_transport)
    raise ValueError(f"unknown transport kind: {kind!r}")


__all__ = ["default_transport_factory", "TransportFactory"]
