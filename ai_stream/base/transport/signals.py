"""Signals a transport delivers to its listener, in arrival order."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

from ..errors import TransportFailure


@dataclass(frozen=True)
class Opened:
    """The connection is established (repeats after each streaming auto-retry)."""


@dataclass(frozen=True)
class MessageReceived:
    """Raw message text (SSE ``data`` or the single-shot response body)."""

    data: str


@dataclass(frozen=True)
class Failed:
    """Unclassified failure; the controller runs it through ``classify_failure``."""

    failure: TransportFailure


@dataclass(frozen=True)
class Completed:
    """The transport stopped for good and will emit nothing further."""


Signal = Union[Opened, MessageReceived, Failed, Completed]
SignalListener = Callable[[Signal], None]


__all__ = ["Opened", "MessageReceived", "Failed", "Completed", "Signal", "SignalListener"]
