"""Unit tests for JSON decoding with ISO-8601 date revival."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ai_stream.base.utils import parse_with_date, safe_parse


def test_iso_strings_become_aware_datetimes_recursively():
    payload = parse_with_date(
        '{"type": "agent_response", "at": "2018-05-24T12:00:00.123Z",'
        ' "items": [{"ts": "2020-01-01T00:00:00+02:00"}], "note": "2020-01-01"}'
    )
    assert payload["at"] == datetime(2018, 5, 24, 12, 0, 0, 123000, tzinfo=timezone.utc)
    assert payload["items"][0]["ts"].utcoffset().total_seconds() == 7200
    assert payload["note"] == "2020-01-01"


def test_parse_with_date_raises_on_malformed():
    with pytest.raises(ValueError):
        parse_with_date("{not json")


@pytest.mark.parametrize("raw", [None, "", "{", "undefined"])
def test_safe_parse_returns_none_for_bad_input(raw):
    assert safe_parse(raw) is None


def test_safe_parse_keeps_scalars():
    assert safe_parse("3") == 3
    assert safe_parse('"x"') == "x"
