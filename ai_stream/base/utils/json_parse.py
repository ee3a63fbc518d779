"""JSON decoding helpers for inbound stream payloads.

``parse_with_date`` upgrades ISO-8601 timestamp strings (``2018-05-24T12:00:00.123Z``)
to timezone-aware :class:`datetime.datetime` values anywhere in the decoded
document. ``safe_parse`` wraps it and returns ``None`` instead of raising.
"""
from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any, Optional

ISO_DATE_FORMAT = re.compile(
    r"^\d{4}-[01]\d-[0-3]\dT[0-2]\d:[0-5]\d:[0-5]\d(\.\d+)?(Z|[+-][01]\d:[0-5]\d)$"
)


def _revive(value: Any) -> Any:
    if isinstance(value, str):
        if ISO_DATE_FORMAT.match(value):
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                return value
        return value
    if isinstance(value, dict):
        return {k: _revive(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_revive(v) for v in value]
    return value


def parse_with_date(data: str | bytes) -> Any:
    """Decode JSON, converting ISO-8601 date strings to ``datetime``.

    Raises:
        ValueError: (``json.JSONDecodeError``) on malformed input.
    """
    return _revive(json.loads(data))


def safe_parse(data: Optional[str | bytes]) -> Any:
    """Decode JSON with date revival; ``None`` for empty or malformed input."""
    if data is None:
        return None
    try:
        return parse_with_date(data)
    except (TypeError, ValueError):
        return None


__all__ = ["parse_with_date", "safe_parse", "ISO_DATE_FORMAT"]
