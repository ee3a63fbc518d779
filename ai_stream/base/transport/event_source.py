"""
Streaming transport: an EventSource-style client over ``httpx``.

Behaviour
---------
- Sends the resolved method, headers and JSON body with
  ``accept: text/event-stream`` and ``cache-control: no-cache``.
- A response that is not ``200`` with an event-stream content type is a
  permanent failure: ``Failed`` (with status, reason and body) then
  ``Completed``. No reconnect.
- ``message`` events become ``MessageReceived``; a server ``error`` event
  becomes ``Failed`` carrying the event data. Other event names are ignored.
- A network error or the server closing the stream emits ``Failed``; the
  transport then waits ``reconnect_interval`` seconds (or the server's
  ``retry:`` value) and reconnects, sending ``last-event-id`` when one was
  received. Each successful reconnect emits ``Opened`` again.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

import httpx

from ...config.defaults import DEFAULT_RECONNECT_INTERVAL_SECONDS, EVENT_STREAM_CONTENT_TYPE
from ..errors import TransportFailure
from ..http import STREAM_PURPOSE, build_async_client
from ..logging import log_event
from ..models import ResolvedRequestOptions
from .signals import Completed, Failed, MessageReceived, Opened
from .sse_decoder import DEFAULT_EVENT_TYPE, ServerSentEvent, SSEDecoder
from .transport_base import BaseTransport, ReadyState, TransportKind, encode_body

ERROR_EVENT_TYPE = "error"


class EventSourceTransport(BaseTransport):
    """Auto-reconnecting Server-Sent Events transport."""

    kind = TransportKind.STREAMING

    def __init__(
        self,
        *,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
        reconnect_interval: float = DEFAULT_RECONNECT_INTERVAL_SECONDS,
    ) -> None:
        super().__init__(http_transport=http_transport)
        self.reconnect_interval = reconnect_interval
        self._decoder = SSEDecoder()

    @property
    def last_event_id(self) -> Optional[str]:
        return self._decoder.last_event_id

    def _request_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        out = dict(headers)
        out["accept"] = EVENT_STREAM_CONTENT_TYPE
        out["cache-control"] = "no-cache"
        if self._decoder.last_event_id:
            out["last-event-id"] = self._decoder.last_event_id
        return out

    def _retry_delay(self) -> float:
        if self._decoder.retry is not None:
            return self._decoder.retry / 1000
        return self.reconnect_interval

    async def _run(self, options: ResolvedRequestOptions, headers: Dict[str, str]) -> None:
        body = encode_body(options.data)
        async with build_async_client(STREAM_PURPOSE, transport=self._http_transport) as client:
            attempt = 0
            while not self.cancelled:
                attempt += 1
                self.ready_state = ReadyState.CONNECTING
                log_event(self._logger, "sse.connect", self._ctx, level=logging.DEBUG, attempt=attempt)
                try:
                    permanent = await self._consume(client, options, headers, body)
                except httpx.HTTPError as exc:
                    permanent = False
                    self._decoder.reset()
                    if self.cancelled:
                        return
                    self._emit(Failed(TransportFailure(url=options.url, cause=exc)))
                if permanent or self.cancelled:
                    return
                self.ready_state = ReadyState.CONNECTING
                delay = self._retry_delay()
                log_event(self._logger, "sse.reconnect_scheduled", self._ctx, level=logging.DEBUG, delay_s=delay)
                await asyncio.sleep(delay)

    async def _consume(
        self,
        client: httpx.AsyncClient,
        options: ResolvedRequestOptions,
        headers: Dict[str, str],
        body: Optional[str],
    ) -> bool:
        """Run one connection; return ``True`` when the failure is permanent or the transport stopped."""
        async with client.stream(
            options.method,
            options.url,
            headers=self._request_headers(headers),
            content=body,
        ) as response:
            content_type = response.headers.get("content-type", "")
            if response.status_code != 200 or not content_type.startswith(EVENT_STREAM_CONTENT_TYPE):
                raw = await response.aread()
                text = raw.decode(response.encoding or "utf-8", errors="replace")
                self.ready_state = ReadyState.CLOSED
                self._emit(
                    Failed(
                        TransportFailure(
                            url=options.url,
                            data=text or None,
                            status_code=response.status_code,
                            status_text=response.reason_phrase or None,
                        )
                    )
                )
                self._emit(Completed())
                return True

            self.ready_state = ReadyState.OPEN
            self._emit(Opened())
            if self.cancelled:
                return True
            async for line in response.aiter_lines():
                event = self._decoder.feed(line)
                if event is None:
                    continue
                self._dispatch(event, options.url)
                if self.cancelled:
                    return True

        # Server closed the stream: treat as a broken connection and retry.
        self._decoder.reset()
        self._emit(Failed(TransportFailure(url=options.url)))
        return self.cancelled

    def _dispatch(self, event: ServerSentEvent, url: str) -> None:
        if event.event == DEFAULT_EVENT_TYPE:
            self._emit(MessageReceived(event.data))
        elif event.event == ERROR_EVENT_TYPE:
            self._emit(Failed(TransportFailure(url=url, data=event.data)))
        else:
            log_event(self._logger, "sse.event_ignored", self._ctx, level=logging.DEBUG, event_type=event.event)


__all__ = ["EventSourceTransport"]
