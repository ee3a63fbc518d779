"""
Structured lifecycle log entry DTO.

Purpose
-------
Define the ``LogEntry`` record delivered to log sinks for every lifecycle
milestone and failure, plus the ``Severity`` scale used to route it.

External dependencies
---------------------
- Pydantic v2 for validation, truncation hooks and camelCase wire dumps.

Wire format
-----------
``to_wire()`` returns the JSON-ready mapping posted to the remote collector:
``date, action, result, elapsedTime, info, stats, errorCode?, errorMessage?``.
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ...config.defaults import LOG_ERROR_MESSAGE_MAX_CHARS, LOG_INFO_VALUE_MAX_CHARS


class Severity(str, Enum):
    """Outcome of a logged action (``result`` on the wire)."""

    OK = "OK"
    WARN = "WARN"
    ERROR = "ERROR"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LogEntry(BaseModel):
    """One structured lifecycle log record.

    Attributes
    ----------
    date:
        Creation time (UTC).
    action:
        Milestone tag such as ``SSE_START`` or ``SSE_ERROR``.
    result:
        :class:`Severity` of the entry.
    elapsed_time:
        Milliseconds spent in the action; ``0`` when not measured.
    info:
        Text data for display; ``None`` values are dropped and each value is
        truncated to 500000 characters.
    stats:
        Numeric data for aggregation; ``None`` values are dropped.
    error_code / error_message:
        Failure classification; the message is truncated to 1000 characters.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    date: datetime = Field(default_factory=_utcnow)
    action: str
    result: Severity = Severity.OK
    elapsed_time: float = 0
    info: Dict[str, str] = Field(default_factory=dict)
    stats: Dict[str, float] = Field(default_factory=dict)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @field_validator("info", mode="before")
    @classmethod
    def _clean_info(cls, value: Any) -> Dict[str, str]:
        if not value:
            return {}
        return {
            str(k): str(v)[:LOG_INFO_VALUE_MAX_CHARS]
            for k, v in dict(value).items()
            if v is not None
        }

    @field_validator("stats", mode="before")
    @classmethod
    def _clean_stats(cls, value: Any) -> Dict[str, float]:
        if not value:
            return {}
        return {str(k): v for k, v in dict(value).items() if v is not None}

    @field_validator("error_message", mode="before")
    @classmethod
    def _truncate_message(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)[:LOG_ERROR_MESSAGE_MAX_CHARS]

    def to_wire(self) -> Dict[str, Any]:
        """Return the camelCase, JSON-serializable representation."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["LogEntry", "Severity"]
