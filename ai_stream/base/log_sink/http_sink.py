"""
Remote log delivery over HTTP.

Purpose
-------
Batch lifecycle entries and POST them as ``{"events": [...]}`` to
``<logger_url>/<app_name>``.

Batching
--------
The first ``emit`` on a running event loop schedules a flush task; every entry
emitted before that task runs (i.e. during the same loop iteration) travels in
the same request. Without a running loop entries stay buffered until
``flush()`` or ``aclose()`` is awaited.

Failure modes
-------------
Any delivery error is reported on the local package logger and the batch is
dropped; nothing propagates to the controller or out of a flush task that
``close()`` scheduled and nobody awaits.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Set

import httpx

from ...config.defaults import DEFAULT_LOGGER_APP_NAME, JSON_CONTENT_TYPE
from ..http import build_async_client
from ..logging import get_logger, log_event
from .log_entry import LogEntry, Severity

_logger = get_logger("ai_stream.log_sink")


class HttpLogSink:
    """Batched HTTP log sink."""

    def __init__(
        self,
        url: str,
        app_name: str = DEFAULT_LOGGER_APP_NAME,
        *,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.endpoint = f"{url.rstrip('/')}/{app_name}"
        self._http_transport = http_transport
        self._pending: List[LogEntry] = []
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def pending(self) -> int:
        """Number of buffered entries not yet handed to a request."""
        return len(self._pending)

    def emit(self, severity: Severity, entry: LogEntry) -> None:
        if self._closed:
            return
        self._pending.append(entry)
        self._schedule_flush()

    def _schedule_flush(self) -> None:
        if any(not t.done() for t in self._tasks):
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        task = loop.create_task(self.flush(), name="ai_stream.log_flush")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def flush(self) -> None:
        """Send every buffered entry; entries arriving meanwhile go in follow-up batches."""
        while self._pending:
            batch, self._pending = self._pending, []
            await self._send(batch)

    async def _send(self, batch: List[LogEntry]) -> None:
        body = {"events": [entry.to_wire() for entry in batch]}
        headers = {"content-type": JSON_CONTENT_TYPE, "accept": JSON_CONTENT_TYPE}
        try:
            async with build_async_client("logs", transport=self._http_transport) as client:
                response = await client.post(self.endpoint, json=body, headers=headers)
                response.raise_for_status()
        except Exception as exc:  # noqa: BLE001
            log_event(
                _logger,
                "LOG_DELIVERY_FAILED",
                level=logging.WARNING,
                endpoint=self.endpoint,
                dropped=len(batch),
                error=str(exc),
            )

    def close(self) -> None:
        """Stop accepting entries and flush what is buffered when a loop is running."""
        if self._closed:
            return
        self._closed = True
        if self._pending:
            self._schedule_flush()

    async def aclose(self) -> None:
        """Stop accepting entries and deliver everything still buffered."""
        self._closed = True
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        await self.flush()


__all__ = ["HttpLogSink"]
