"""Connection lifecycle state machine.

``ConnectionController`` selects a transport (streaming or single-shot),
manages connect/disconnect/retry, classifies failures, filters and
accumulates inbound messages and publishes every change through its
:class:`StateStore`.

Concurrency model:
    Single-threaded on the running ``asyncio`` loop. Public operations are
    synchronous and never raise; transports run as tasks and deliver signals
    in arrival order. Each transport is bound to its own listener, and
    signals from a transport that is no longer active are ignored.

Retry ceiling:
    Every classified streaming error increments ``retry_count`` and is
    surfaced (state, ``on_error``, log). Once ``retry_count`` reaches
    ``retry_attempts`` the controller performs a hard disconnect, so no
    further error callback can fire for that lifecycle.
"""
from __future__ import annotations

import json
import logging
import time
import uuid
from functools import partial
from typing import Any, Callable, Mapping, Optional

import httpx
from pydantic import ValidationError

from ..base.errors import StreamException, TransportFailure, classify_failure
from ..base.log_sink import (
    RUNTIME_ERROR,
    HttpLogSink,
    LifecycleLogger,
    LogSink,
    LoggerSink,
)
from ..base.logging import get_logger, log_event
from ..base.log_support import LogContext
from ..base.models import (
    AcceptedMessage,
    ConnectionState,
    ConnectionStatus,
    EndOfStream,
    ErrorInfo,
    RequestOptions,
    ResolvedRequestOptions,
    build_request_headers,
    classify_message,
    merge_request_options,
)
from ..base.state_store import Listener, StateStore
from ..base.transport import (
    BaseTransport,
    Completed,
    Failed,
    MessageReceived,
    Opened,
    Signal,
    TransportFactory,
    TransportKind,
    default_transport_factory,
)
from ..base.utils import parse_with_date, safe_parse
from .controller_fields import ControllerFields
from .controller_options import ControllerOptions

_logger = get_logger("ai_stream.controller")

CALLBACK_ERROR = "CALLBACK_ERROR"
MESSAGE_DROPPED = "SSE_MESSAGE_DROPPED"


class ConnectionController:
    """Client-side controller for one AI chat event stream.

    Args:
        options: Construction parameters; keyword ``overrides`` build one
            when omitted.
        transport_factory: ``kind -> BaseTransport``; defaults to the httpx
            transports.
        log_sink: Destination for lifecycle entries. When omitted the
            controller creates (and owns) an ``HttpLogSink`` for
            ``logger_url`` or a ``LoggerSink``.
        http_transport: ``httpx`` transport handed to the default transports
            and the owned HTTP log sink.
        clock: Wall-clock source in seconds, injectable for tests.
    """

    def __init__(
        self,
        options: Optional[ControllerOptions] = None,
        *,
        transport_factory: Optional[TransportFactory] = None,
        log_sink: Optional[LogSink] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.time,
        **overrides: Any,
    ) -> None:
        self._options = options if options is not None else ControllerOptions(**overrides)
        self._base_request = self._options.base_request
        self._transport_factory = transport_factory or partial(
            default_transport_factory,
            http_transport=http_transport,
            reconnect_interval=self._options.reconnect_interval,
        )
        self._owns_sink = log_sink is None
        if log_sink is None:
            if self._options.logger_url:
                log_sink = HttpLogSink(
                    self._options.logger_url,
                    self._options.logger_app_name,
                    http_transport=http_transport,
                )
            else:
                log_sink = LoggerSink()
        self._sink = log_sink
        self._log = LifecycleLogger(log_sink)
        self._clock = clock
        self._store = StateStore()
        self._fields = ControllerFields()
        self._resolved: Optional[ResolvedRequestOptions] = None
        self._last_transport: Optional[BaseTransport] = None

    # Observable surface ------------------------------------------------------
    @property
    def options(self) -> ControllerOptions:
        return self._options

    @property
    def state(self) -> ConnectionState:
        """Current immutable snapshot."""
        return self._store.state

    @property
    def active_transport(self) -> Optional[BaseTransport]:
        return self._fields.transport

    @property
    def trace_id(self) -> Optional[str]:
        return self._fields.trace_id

    @property
    def retry_count(self) -> int:
        return self._fields.retry_count

    @property
    def open_count(self) -> int:
        return self._fields.open_count

    @property
    def log_sink(self) -> LogSink:
        return self._sink

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for every state update; returns an unsubscribe callable."""
        return self._store.subscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._store.unsubscribe(listener)

    async def wait_closed(self) -> None:
        """Wait until no transport is active and the last transport task has finished."""
        while self._fields.transport is not None:
            transport = self._fields.transport
            await transport.wait_closed()
            if transport is self._fields.transport:
                # Task ended without a Completed signal.
                break
        if self._last_transport is not None:
            await self._last_transport.wait_closed()

    # Public operations ---------------------------------------------------------
    def connect(self, options: RequestOptions | Mapping[str, Any] | None = None) -> None:
        """Start a new lifecycle unless a transport is already active.

        Never raises: invalid options and start-up failures become an error
        state, an ``on_error`` call and an ERROR log entry.
        """
        if self._fields.transport is not None:
            log_event(
                _logger,
                "connect.ignored",
                self._ctx(),
                level=logging.DEBUG,
                status=self.state.status.value,
            )
            return

        fields = self._fields
        fields.trace_id = str(uuid.uuid4())
        fields.retry_count = 0
        fields.start_time = self._clock() * 1000

        try:
            per_call = self._coerce_options(options)
            resolved = merge_request_options(self._base_request, per_call)
        except (ValidationError, TypeError, ValueError) as exc:
            self._fail_before_start(None, exc, action="SSE_START")
            return
        self._resolved = resolved

        self._log.info(
            "SSE_START",
            trace_id=fields.trace_id,
            info={
                "url": resolved.url,
                "method": resolved.method,
                "payload": json.dumps(resolved.data, default=str) if resolved.data is not None else None,
                "headers": json.dumps(resolved.headers),
                "streaming": str(resolved.streaming).lower(),
            },
            stats={"start_time": fields.start_time},
        )

        kind = TransportKind.STREAMING if resolved.streaming else TransportKind.SINGLE_SHOT
        try:
            transport = self._transport_factory(kind)
        except Exception as exc:  # noqa: BLE001
            self._fail_before_start(None, exc, action="SSE_START")
            return
        fields.transport = transport
        self._last_transport = transport
        headers = build_request_headers(resolved, fields.trace_id)

        if kind is TransportKind.STREAMING:
            self._store.update(
                transport,
                status=ConnectionStatus.CONNECTING,
                stream_message=None,
                full_messages=(),
                error=None,
            )

        try:
            transport.start(resolved, headers, partial(self._on_signal, transport))
        except Exception as exc:  # noqa: BLE001
            fields.transport = None
            self._fail_before_start(transport, exc, action="SSE_START")

    def disconnect(self) -> None:
        """Tear down the active transport; idempotent."""
        self._fields.retry_count = 0
        self._teardown()

    def destroy(self) -> None:
        """Disconnect, reset to ``idle`` with empty buffers and detach all subscribers."""
        self.disconnect()
        self._store.update(
            None,
            status=ConnectionStatus.IDLE,
            stream_message=None,
            full_messages=(),
            error=None,
        )
        self._store.clear_subscribers()
        if self._owns_sink:
            self._sink.close()

    # Signal handling -------------------------------------------------------------
    def _on_signal(self, transport: BaseTransport, signal: Signal) -> None:
        if transport is not self._fields.transport:
            return
        if isinstance(signal, Opened):
            self._handle_open(transport)
        elif isinstance(signal, MessageReceived):
            if transport.kind is TransportKind.STREAMING:
                self._handle_stream_message(transport, signal.data)
            else:
                self._handle_single_response(transport, signal.data)
        elif isinstance(signal, Failed):
            if transport.kind is TransportKind.STREAMING:
                self._handle_stream_error(transport, signal.failure)
            else:
                self._handle_single_failure(transport, classify_failure(signal.failure))
        elif isinstance(signal, Completed):
            self._teardown()

    def _handle_open(self, transport: BaseTransport) -> None:
        fields = self._fields
        streaming = transport.kind is TransportKind.STREAMING
        elapsed = self._clock() * 1000 - fields.start_time if fields.start_time is not None else 0
        fields.start_time = None
        fields.open_count = fields.open_count + 1 if streaming else 1
        fields.retry_count = 0
        changes: dict[str, Any] = {"status": ConnectionStatus.OPEN, "stream_message": None, "error": None}
        if not streaming:
            # Single-shot is optimistically open: Opened arrives inside start().
            changes["full_messages"] = ()
        self._store.update(transport, **changes)
        info: dict[str, Optional[str]] = {"url": transport.url}
        if not streaming and self._resolved is not None:
            info |= {
                "method": self._resolved.method,
                "headers": json.dumps(self._resolved.headers),
                "streaming": "false",
            }
        else:
            info["ready_state"] = transport.ready_state.value
        self._log.info(
            "SSE_OPEN" if streaming else "SSE_OPEN_USE_FETCH",
            trace_id=fields.trace_id,
            info=info,
            stats={"connecting_times": fields.open_count},
            elapsed_time=elapsed,
        )
        self._invoke("on_open")

    def _handle_stream_message(self, transport: BaseTransport, data: str) -> None:
        payload = safe_parse(data)
        if payload is None:
            return
        message = classify_message(payload, self._options.accept_msg_types)
        if isinstance(message, EndOfStream):
            self._teardown()
            return
        if isinstance(message, AcceptedMessage):
            self._store.update(
                transport,
                status=ConnectionStatus.OPEN,
                stream_message=payload,
                full_messages=(*self.state.full_messages, payload),
                error=None,
            )
            self._invoke("on_message", payload)
            return
        if self._options.strict_message_types:
            self._log.warn(
                MESSAGE_DROPPED,
                trace_id=self._fields.trace_id,
                error_code="UNACCEPTED_MESSAGE_TYPE",
                error_message=f"dropped message of type {message.type!r}",
                info={"message_type": str(message.type), "url": transport.url},
            )

    def _handle_stream_error(self, transport: BaseTransport, failure: TransportFailure) -> None:
        exc = classify_failure(failure)
        fields = self._fields
        self._log.exception(
            exc,
            "SSE_ERROR",
            trace_id=fields.trace_id,
            stats={"retry_count": fields.retry_count + 1},
        )
        fields.retry_count += 1
        self._store.update(
            transport,
            status=ConnectionStatus.ERROR,
            stream_message=None,
            error=_error_info(exc),
        )
        self._invoke("on_error", exc)
        if fields.retry_count >= self._options.retry_attempts and transport is fields.transport:
            log_event(
                _logger,
                "retry.ceiling_reached",
                self._ctx(),
                level=logging.INFO,
                retry_count=fields.retry_count,
            )
            self.disconnect()

    def _handle_single_response(self, transport: BaseTransport, data: str) -> None:
        try:
            payload = parse_with_date(data)
        except (TypeError, ValueError):
            self._handle_single_failure(
                transport,
                classify_failure(TransportFailure(url=transport.url, data=data or None)),
            )
            return
        self._store.update(
            transport,
            stream_message=payload,
            full_messages=(payload,),
            error=None,
        )
        self._invoke("on_message", payload)

    def _handle_single_failure(self, transport: BaseTransport, exc: StreamException) -> None:
        self._log.exception(exc, "SSE_ERROR_USE_FETCH", trace_id=self._fields.trace_id)
        self._store.update(
            transport,
            status=ConnectionStatus.ERROR,
            stream_message=None,
            full_messages=(),
            error=_error_info(exc),
        )
        self._invoke("on_error", exc)

    # Teardown --------------------------------------------------------------------
    def _teardown(self) -> None:
        transport = self._fields.transport
        if transport is None:
            return
        suffix = "" if transport.kind is TransportKind.STREAMING else "_USE_FETCH"
        trace_id = self._fields.trace_id
        self._log.info(f"SSE_DISCONNECTING{suffix}...", trace_id=trace_id)
        self._fields.transport = None
        transport.cancel()
        self._store.update(None, status=ConnectionStatus.CLOSED)
        self._log.info(f"SSE_DISCONNECTED{suffix}", trace_id=trace_id)
        self._invoke("on_disconnect")

    def _fail_before_start(
        self,
        transport: Optional[BaseTransport],
        exc: BaseException,
        *,
        action: str,
    ) -> None:
        self._log.exception(exc, action, trace_id=self._fields.trace_id)
        self._store.update(
            transport,
            status=ConnectionStatus.ERROR,
            stream_message=None,
            error=_error_info(exc),
        )
        self._invoke("on_error", exc)

    # Helpers -----------------------------------------------------------------------
    @staticmethod
    def _coerce_options(options: RequestOptions | Mapping[str, Any] | None) -> RequestOptions:
        if options is None:
            return RequestOptions()
        if isinstance(options, RequestOptions):
            return options
        return RequestOptions.model_validate(dict(options))

    def _ctx(self) -> LogContext:
        transport = self._fields.transport
        return LogContext(
            trace_id=self._fields.trace_id,
            transport=transport.kind.value if transport is not None else None,
        )

    def _invoke(self, name: str, *args: Any) -> None:
        """Run a user callback; exceptions are logged, never propagated."""
        callback = getattr(self._options, name)
        if callback is None:
            return
        try:
            callback(*args)
        except Exception as exc:  # noqa: BLE001
            self._log.exception(
                exc,
                CALLBACK_ERROR,
                trace_id=self._fields.trace_id,
                info={"callback": name},
            )


def _error_info(exc: BaseException) -> ErrorInfo:
    code = getattr(exc, "error_code", None)
    if code is None:
        code = getattr(exc, "status_code", None)
    if code is None and not isinstance(exc, StreamException):
        code = RUNTIME_ERROR
    message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
    return ErrorInfo(error_code=code, error_message=message)


__all__ = ["ConnectionController", "CALLBACK_ERROR", "MESSAGE_DROPPED"]
