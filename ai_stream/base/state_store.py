"""
Per-controller observable state store.

Purpose
-------
Hold the current :class:`ConnectionState` snapshot and broadcast every change
to subscribers. Each controller owns its own store; there is no process-wide
registry.

Notification semantics
----------------------
- ``update`` merges the changes into a new snapshot and notifies every
  subscriber synchronously, in subscription order, before returning.
- No batching, deduplication or reordering: N updates produce N
  notifications per subscriber.
- A subscriber that raises is logged and skipped; the remaining subscribers
  are still notified.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from .logging import get_logger, log_event
from .models import INITIAL_STATE, ConnectionState

_logger = get_logger("ai_stream.state")


@dataclass(frozen=True)
class StateUpdate:
    """Notification payload: the transport that caused the change and the new snapshot."""

    transport: Any
    state: ConnectionState


Listener = Callable[[StateUpdate], None]


class StateStore:
    """Snapshot holder with synchronous subscriber notification."""

    def __init__(self, initial: Optional[ConnectionState] = None) -> None:
        self._state = initial or INITIAL_STATE
        self._listeners: List[Listener] = []

    @property
    def state(self) -> ConnectionState:
        return self._state

    def update(self, transport: Any, **changes: Any) -> ConnectionState:
        """Merge ``changes`` into the snapshot and notify all subscribers."""
        self._state = self._state.merge(**changes)
        event = StateUpdate(transport=transport, state=self._state)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as exc:  # noqa: BLE001
                log_event(
                    _logger,
                    "SUBSCRIBER_ERROR",
                    level=logging.ERROR,
                    status=self._state.status.value,
                    error=str(exc),
                    exception_type=type(exc).__name__,
                )
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable removing it again."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            self.unsubscribe(listener)

        return _unsubscribe

    def unsubscribe(self, listener: Listener) -> None:
        """Remove ``listener``; unknown listeners are ignored."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def clear_subscribers(self) -> None:
        self._listeners.clear()

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)


__all__ = ["StateStore", "StateUpdate", "Listener"]
