"""Internal state holder for cancellation tokens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class State:
    """Cancellation flag plus the optional reason supplied to ``cancel``."""

    cancelled: bool = False
    reason: Optional[str] = None


__all__ = ["State"]
