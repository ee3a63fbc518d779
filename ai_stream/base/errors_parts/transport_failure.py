"""
Raw failure signal reported by a transport.

Transports never classify; they describe what they saw and the controller
hands this record to :func:`classify_failure`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TransportFailure:
    """What a transport observed when something went wrong.

    Attributes:
        url: Request URL the transport was working against.
        data: Raw body text (HTTP error body or SSE ``error`` event data).
        status_code: HTTP status when a response was received. ``None`` for
            failures inside an open event stream and for network errors.
        status_text: HTTP reason phrase when available.
        cause: Underlying exception for network-level failures.
    """

    url: str
    data: Optional[str] = None
    status_code: Optional[int] = None
    status_text: Optional[str] = None
    cause: Optional[BaseException] = None


__all__ = ["TransportFailure"]
