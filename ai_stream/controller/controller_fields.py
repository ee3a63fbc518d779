"""Mutable per-controller bookkeeping, kept apart from the published snapshot."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..base.transport import BaseTransport


@dataclass
class ControllerFields:
    """Fields owned by one controller and never shared with observers.

    Attributes:
        transport: The active transport, ``None`` when nothing is in flight.
        trace_id: Correlation id of the current connect lifecycle.
        start_time: Epoch milliseconds of the last ``connect()``; cleared on open.
        retry_count: Consecutive streaming errors since the last open.
        open_count: Number of ``Opened`` signals seen (auto-retries included).
    """

    transport: Optional[BaseTransport] = None
    trace_id: Optional[str] = None
    start_time: Optional[float] = None
    retry_count: int = 0
    open_count: int = 0


__all__ = ["ControllerFields"]
