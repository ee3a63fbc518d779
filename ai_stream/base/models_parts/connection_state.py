"""
Immutable connection-state snapshot published to observers.

Every mutation produces a new :class:`ConnectionState` via :meth:`merge`
(shallow replace over the previous snapshot); observers may keep references
to old snapshots safely.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Tuple


class ConnectionStatus(str, Enum):
    """Lifecycle status of the controller."""

    IDLE = "idle"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"
    ERROR = "error"


@dataclass(frozen=True)
class ErrorInfo:
    """Error published in the snapshot (``{error_code, error_message}``)."""

    error_code: Optional[str | int] = None
    error_message: Optional[str] = None


@dataclass(frozen=True)
class ConnectionState:
    """Snapshot of one controller's observable state.

    Attributes:
        status: Current :class:`ConnectionStatus`.
        stream_message: Payload of the last accepted message (or the single
            response on the single-shot path).
        full_messages: Accepted payloads of the current lifecycle, in order.
        error: Last classified failure, cleared on open and on each accepted
            message.
    """

    status: ConnectionStatus = ConnectionStatus.IDLE
    stream_message: Optional[Any] = None
    full_messages: Tuple[Any, ...] = ()
    error: Optional[ErrorInfo] = None

    def merge(self, **changes: Any) -> "ConnectionState":
        """Return a new snapshot with ``changes`` applied."""
        return replace(self, **changes)


INITIAL_STATE = ConnectionState()


__all__ = ["ConnectionStatus", "ErrorInfo", "ConnectionState", "INITIAL_STATE"]
