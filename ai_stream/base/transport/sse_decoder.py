"""
Incremental decoder for the ``text/event-stream`` wire format.

Lines are fed one at a time (already split on CR, LF or CRLF, as produced by
``httpx.Response.aiter_lines``). A blank line dispatches the buffered event.

Field handling follows the EventSource processing model:

- ``event``: sets the type of the pending event (``message`` when absent).
- ``data``: appended to the data buffer, joined with ``\\n``.
- ``id``: updates ``last_event_id`` (values containing NUL are ignored).
- ``retry``: an all-digit value updates ``retry`` (milliseconds) immediately.
- Lines starting with ``:`` are comments; unknown fields are ignored.
- An event with an empty data buffer is never dispatched.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

DEFAULT_EVENT_TYPE = "message"


@dataclass(frozen=True)
class ServerSentEvent:
    event: str
    data: str
    id: Optional[str] = None


class SSEDecoder:
    """Stateful line decoder; one instance per transport so ``last_event_id`` survives reconnects."""

    def __init__(self) -> None:
        self._event_type = ""
        self._data: List[str] = []
        self.last_event_id: Optional[str] = None
        self.retry: Optional[int] = None

    def reset(self) -> None:
        """Drop a partially received event (used when a connection breaks)."""
        self._event_type = ""
        self._data = []

    def feed(self, line: str) -> Optional[ServerSentEvent]:
        """Consume one line; return an event when the line completes one."""
        if not line:
            return self._dispatch()
        if line.startswith(":"):
            return None
        field, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]
        if field == "event":
            self._event_type = value
        elif field == "data":
            self._data.append(value)
        elif field == "id":
            if "\0" not in value:
                self.last_event_id = value
        elif field == "retry":
            if value.isdigit():
                self.retry = int(value)
        return None

    def _dispatch(self) -> Optional[ServerSentEvent]:
        if not self._data:
            self._event_type = ""
            return None
        event = ServerSentEvent(
            event=self._event_type or DEFAULT_EVENT_TYPE,
            data="\n".join(self._data),
            id=self.last_event_id,
        )
        self.reset()
        return event


__all__ = ["SSEDecoder", "ServerSentEvent", "DEFAULT_EVENT_TYPE"]
