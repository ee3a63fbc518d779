"""Helper fakes for controller state-machine tests.

Defines an in-memory ``FakeTransport`` that records what the controller asked
for and lets a test drive signals synchronously, plus a ``CollectingSink``
that keeps every lifecycle log entry for assertions.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ai_stream.base.errors import TransportFailure
from ai_stream.base.log_sink import LogEntry, Severity
from ai_stream.base.models import ResolvedRequestOptions
from ai_stream.base.state_store import StateUpdate
from ai_stream.base.transport import (
    Completed,
    Failed,
    MessageReceived,
    Opened,
    ReadyState,
    SignalListener,
    TransportKind,
)


class FakeTransport:
    """Transport double; single-shot instances emit ``Opened`` inside ``start`` like the real one."""

    def __init__(self, kind: TransportKind) -> None:
        self.kind = kind
        self.url = ""
        self.ready_state = ReadyState.CONNECTING
        self.options: Optional[ResolvedRequestOptions] = None
        self.headers: Dict[str, str] = {}
        self.listener: Optional[SignalListener] = None
        self.cancel_calls = 0
        self.started = False

    def start(self, options: ResolvedRequestOptions, headers: Dict[str, str], listener: SignalListener) -> None:
        self.options = options
        self.headers = headers
        self.url = options.url
        self.listener = listener
        self.started = True
        if self.kind is TransportKind.SINGLE_SHOT:
            self.open()

    def cancel(self, reason: str = "disconnect") -> None:
        self.cancel_calls += 1
        self.listener = None
        self.ready_state = ReadyState.CLOSED

    async def wait_closed(self) -> None:
        return None

    # Drivers -----------------------------------------------------------------
    def _emit(self, signal: Any) -> None:
        if self.listener is not None:
            self.listener(signal)

    def open(self) -> None:
        self.ready_state = ReadyState.OPEN
        self._emit(Opened())

    def message(self, payload: Any) -> None:
        data = payload if isinstance(payload, str) else json.dumps(payload)
        self._emit(MessageReceived(data))

    def fail(
        self,
        data: Any = None,
        *,
        status_code: Optional[int] = None,
        status_text: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        if data is not None and not isinstance(data, str):
            data = json.dumps(data)
        self._emit(
            Failed(
                TransportFailure(
                    url=self.url,
                    data=data,
                    status_code=status_code,
                    status_text=status_text,
                    cause=cause,
                )
            )
        )

    def complete(self) -> None:
        self.ready_state = ReadyState.CLOSED
        self._emit(Completed())


class FakeTransportFactory:
    """``kind -> FakeTransport`` recording every transport it built."""

    def __init__(self) -> None:
        self.created: List[FakeTransport] = []

    def __call__(self, kind: TransportKind) -> FakeTransport:
        transport = FakeTransport(kind)
        self.created.append(transport)
        return transport

    @property
    def last(self) -> FakeTransport:
        return self.created[-1]


class CollectingSink:
    """Log sink keeping ``(severity, entry)`` pairs."""

    def __init__(self) -> None:
        self.entries: List[Tuple[Severity, LogEntry]] = []
        self.closed = False

    def emit(self, severity: Severity, entry: LogEntry) -> None:
        self.entries.append((severity, entry))

    def close(self) -> None:
        self.closed = True

    def actions(self) -> List[str]:
        return [entry.action for _, entry in self.entries]

    def find(self, action: str) -> List[Tuple[Severity, LogEntry]]:
        return [(sev, entry) for sev, entry in self.entries if entry.action == action]


@dataclass
class Recorder:
    """Collects callback invocations and state updates."""

    opened: int = 0
    messages: List[Any] = field(default_factory=list)
    errors: List[BaseException] = field(default_factory=list)
    disconnects: int = 0
    updates: List[StateUpdate] = field(default_factory=list)

    def on_open(self) -> None:
        self.opened += 1

    def on_message(self, payload: Any) -> None:
        self.messages.append(payload)

    def on_error(self, exc: BaseException) -> None:
        self.errors.append(exc)

    def on_disconnect(self) -> None:
        self.disconnects += 1

    def on_update(self, update: StateUpdate) -> None:
        self.updates.append(update)

    def callbacks(self) -> Dict[str, Any]:
        return {
            "on_open": self.on_open,
            "on_message": self.on_message,
            "on_error": self.on_error,
            "on_disconnect": self.on_disconnect,
        }

    def statuses(self) -> List[str]:
        return [u.state.status.value for u in self.updates]
