"""Structured logging context object for lifecycle events.

This module defines :class:`LogContext`, a dataclass carrying the fields shared
by every log line of one connect-lifecycle (trace id, transport kind, request
URL) plus an ``extra`` mapping. ``to_dict`` merges ``extra`` and prunes
``None`` values for clean structured output.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for lifecycle logging events."""

    trace_id: Optional[str] = None
    transport: Optional[str] = None
    url: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
