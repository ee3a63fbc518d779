"""
Tagged message variants keyed by the ``type`` discriminator.

Inbound stream payloads are loosely typed JSON objects. ``classify_message``
maps each decoded payload to exactly one variant so filtering stays
exhaustive:

- :class:`EndOfStream`: ``type == "end"``, graceful server termination.
- :class:`AcceptedMessage`: ``type`` in the configured allow-list.
- :class:`UnrecognizedMessage`: everything else, including payloads that are
  not objects or carry no ``type``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Collection, Optional

from ...config.defaults import END_MESSAGE_TYPE


@dataclass(frozen=True)
class StreamMessage:
    """Base variant: the discriminator and the decoded payload."""

    type: Optional[str]
    payload: Any


@dataclass(frozen=True)
class AcceptedMessage(StreamMessage):
    """Message whose type is in the accepted set; surfaced to callers."""


@dataclass(frozen=True)
class EndOfStream(StreamMessage):
    """Reserved ``end`` message; closes the stream without error."""


@dataclass(frozen=True)
class UnrecognizedMessage(StreamMessage):
    """Fallthrough for types outside the accepted set; never surfaced."""


def classify_message(payload: Any, accepted_types: Collection[str]) -> StreamMessage:
    """Return the variant for a decoded inbound payload."""
    msg_type = payload.get("type") if isinstance(payload, dict) else None
    if not isinstance(msg_type, str):
        return UnrecognizedMessage(type=None, payload=payload)
    if msg_type == END_MESSAGE_TYPE:
        return EndOfStream(type=msg_type, payload=payload)
    if msg_type in accepted_types:
        return AcceptedMessage(type=msg_type, payload=payload)
    return UnrecognizedMessage(type=msg_type, payload=payload)


__all__ = [
    "StreamMessage",
    "AcceptedMessage",
    "EndOfStream",
    "UnrecognizedMessage",
    "classify_message",
]
