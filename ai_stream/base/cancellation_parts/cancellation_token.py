"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used by transports so that
``disconnect()`` can stop an in-flight request. Cancellation is recorded on
the token first and registered callbacks (typically cancelling the transport's
``asyncio.Task``) run afterwards, so the task can tell a caller-initiated abort
apart from any other failure.
"""

from __future__ import annotations

from threading import Lock
from typing import Callable, List

from .state import State


class CancellationToken:
    """A cooperative cancellation token with on-cancel callbacks.

    ``cancel`` is idempotent: callbacks run at most once, on the first call.
    Callbacks registered after cancellation run immediately.
    """

    def __init__(self) -> None:
        self._state = State()
        self._lock = Lock()
        self._callbacks: List[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation and run registered callbacks once."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._callbacks)
            self._callbacks.clear()
        for callback in callbacks:
            callback()

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Register ``callback`` to run on cancellation."""
        with self._lock:
            if not self._state.cancelled:
                self._callbacks.append(callback)
                return
        callback()

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, callbacks={len(self._callbacks)})"
        )


__all__ = ["CancellationToken"]
