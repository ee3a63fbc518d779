"""
Single-shot transport: one HTTP request, one response.

Emits ``Opened`` synchronously from ``start`` (the request is considered
open as soon as it is issued), then exactly one of:

- ``MessageReceived(body)`` for a 2xx response,
- ``Failed`` with status code, reason phrase and body otherwise,
- ``Failed`` with the underlying exception for network errors,

followed by ``Completed``. A request aborted through ``cancel`` emits nothing.
"""
from __future__ import annotations

import logging
from typing import Dict

import httpx

from ..errors import TransportFailure
from ..http import build_async_client
from ..logging import log_event
from ..models import ResolvedRequestOptions
from .signals import Completed, Failed, MessageReceived, Opened
from .transport_base import BaseTransport, ReadyState, TransportKind, encode_body

REQUEST_PURPOSE = "request"


class SingleRequestTransport(BaseTransport):
    kind = TransportKind.SINGLE_SHOT

    def _on_start(self) -> None:
        self.ready_state = ReadyState.OPEN
        self._emit(Opened())

    async def _run(self, options: ResolvedRequestOptions, headers: Dict[str, str]) -> None:
        if self.cancelled:
            return
        try:
            async with build_async_client(REQUEST_PURPOSE, transport=self._http_transport) as client:
                response = await client.request(
                    options.method,
                    options.url,
                    headers=headers,
                    content=encode_body(options.data),
                )
        except httpx.HTTPError as exc:
            if self.cancelled:
                return
            self.ready_state = ReadyState.CLOSED
            self._emit(Failed(TransportFailure(url=options.url, cause=exc)))
            self._emit(Completed())
            return

        if self.cancelled:
            return
        log_event(
            self._logger,
            "request.response",
            self._ctx,
            level=logging.DEBUG,
            status_code=response.status_code,
        )
        self.ready_state = ReadyState.CLOSED
        if response.is_success:
            self._emit(MessageReceived(response.text))
        else:
            self._emit(
                Failed(
                    TransportFailure(
                        url=options.url,
                        data=response.text or None,
                        status_code=response.status_code,
                        status_text=response.reason_phrase or None,
                    )
                )
            )
        if not self.cancelled:
            self._emit(Completed())


__all__ = ["SingleRequestTransport", "REQUEST_PURPOSE"]
