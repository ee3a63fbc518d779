"""
Transport abstraction shared by the streaming and single-shot paths.

Purpose
-------
Give the controller one uniform handle regardless of how the response
arrives: ``start`` it with a resolved request, receive :mod:`signals` through
the listener, ``cancel`` it on teardown.

Lifecycle
---------
- ``start`` requires a running event loop (``RuntimeError`` otherwise) and
  schedules the transport body as an ``asyncio.Task``.
- ``cancel`` detaches the listener before cancelling, so no signal reaches
  the controller after teardown. Cancelling from within the transport's own
  task (a listener reacting to a signal) only flips the token; the body
  checks it after every emit and returns.
- Any unexpected exception in the body is reported as ``Failed`` followed
  by ``Completed`` so the controller always sees the transport end.
"""
from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional

import httpx

from ...config.defaults import TRACE_HEADER
from ..cancellation import CancellationToken
from ..errors import TransportFailure
from ..log_support import LogContext
from ..logging import get_logger, log_event
from ..models import ResolvedRequestOptions
from .signals import Completed, Failed, Signal, SignalListener


def encode_body(data: Any) -> Optional[str]:
    """JSON request body, or ``None`` when there is no payload."""
    return json.dumps(data, default=str) if data is not None else None


class TransportKind(str, Enum):
    STREAMING = "streaming"
    SINGLE_SHOT = "single_shot"


class ReadyState(str, Enum):
    """Mirror of the EventSource ``readyState`` values."""

    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class BaseTransport(ABC):
    """Common start/cancel/listener plumbing for concrete transports."""

    kind: TransportKind

    def __init__(self, *, http_transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._http_transport = http_transport
        self._listener: Optional[SignalListener] = None
        self._task: Optional[asyncio.Task] = None
        self._token = CancellationToken()
        self._logger = get_logger(f"ai_stream.transport.{self.kind.value}")
        self._ctx = LogContext(transport=self.kind.value)
        self.ready_state = ReadyState.CONNECTING
        self.url = ""

    @property
    def cancelled(self) -> bool:
        return self._token.cancelled

    def start(
        self,
        options: ResolvedRequestOptions,
        headers: Dict[str, str],
        listener: SignalListener,
    ) -> None:
        """Begin the request on the running loop and route signals to ``listener``."""
        if self._task is not None:
            raise RuntimeError("transport already started")
        loop = asyncio.get_running_loop()
        self.url = options.url
        self._ctx = LogContext(
            trace_id=headers.get(TRACE_HEADER),
            transport=self.kind.value,
            url=options.url,
        )
        self._listener = listener
        self._on_start()
        self._task = loop.create_task(
            self._guarded(options, headers),
            name=f"ai_stream.{self.kind.value}",
        )
        self._token.add_callback(self._cancel_task)
        log_event(self._logger, "transport.start", self._ctx, level=logging.DEBUG, method=options.method)

    def _on_start(self) -> None:
        """Hook run synchronously inside ``start`` before the task is scheduled."""

    def cancel(self, reason: str = "disconnect") -> None:
        """Detach the listener, then abort the request. Idempotent."""
        self._listener = None
        self.ready_state = ReadyState.CLOSED
        if not self._token.cancelled:
            log_event(self._logger, "transport.cancel", self._ctx, level=logging.DEBUG, reason=reason)
        self._token.cancel(reason)

    def _cancel_task(self) -> None:
        task = self._task
        if task is None or task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        if task is current:
            return
        task.cancel()

    async def wait_closed(self) -> None:
        """Wait until the transport task has finished."""
        task = self._task
        if task is not None and not task.done():
            await asyncio.wait({task})

    def _emit(self, signal: Signal) -> None:
        listener = self._listener
        if listener is not None:
            listener(signal)

    async def _guarded(self, options: ResolvedRequestOptions, headers: Dict[str, str]) -> None:
        try:
            await self._run(options, headers)
        except asyncio.CancelledError:
            if not self._token.cancelled:
                raise
        except Exception as exc:  # noqa: BLE001
            log_event(
                self._logger,
                "transport.crashed",
                self._ctx,
                level=logging.ERROR,
                error=str(exc),
                exception_type=type(exc).__name__,
            )
            self.ready_state = ReadyState.CLOSED
            self._emit(Failed(TransportFailure(url=self.url, cause=exc)))
            self._emit(Completed())
        finally:
            self.ready_state = ReadyState.CLOSED

    @abstractmethod
    async def _run(self, options: ResolvedRequestOptions, headers: Dict[str, str]) -> None:
        """Transport body; emits signals via ``_emit`` and returns when done."""


__all__ = ["BaseTransport", "TransportKind", "ReadyState", "encode_body"]
