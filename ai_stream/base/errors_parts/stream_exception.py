"""
Base exception type for the stream controller error taxonomy.

Every failure surfaced to callers (error state, ``on_error`` callback, log
entry) is a :class:`StreamException` subclass. The ``error_code`` attribute is
the value published in ``ConnectionState.error.error_code``.
"""
from __future__ import annotations

from typing import Optional


class StreamException(Exception):
    """Root of the stream failure taxonomy.

    Subclasses are dataclasses and define their own ``message`` and
    ``error_code`` fields. The base only annotates them: a class-level
    value here would become an inherited dataclass default.
    """

    message: str
    error_code: Optional[str]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return getattr(self, "message", "") or super().__str__()


__all__ = ["StreamException"]
