"""Unit tests for the ``text/event-stream`` line decoder."""
from __future__ import annotations

from ai_stream.base.transport import SSEDecoder


def _feed_all(decoder: SSEDecoder, text: str):
    events = []
    for line in text.split("\n"):
        event = decoder.feed(line)
        if event is not None:
            events.append(event)
    return events


def test_default_event_type_and_multiline_data():
    events = _feed_all(SSEDecoder(), "data: first\ndata: second\n\n")
    assert len(events) == 1
    assert events[0].event == "message"
    assert events[0].data == "first\nsecond"


def test_named_events_ids_and_comments():
    decoder = SSEDecoder()
    events = _feed_all(decoder, ": keep-alive\nevent: error\nid: 9\ndata:{\"a\":1}\n\n")
    assert [(e.event, e.data, e.id) for e in events] == [("error", '{"a":1}', "9")]
    assert decoder.last_event_id == "9"


def test_event_type_resets_after_dispatch():
    events = _feed_all(SSEDecoder(), "event: ping\ndata: x\n\ndata: y\n\n")
    assert [e.event for e in events] == ["ping", "message"]


def test_empty_data_buffer_is_not_dispatched():
    assert _feed_all(SSEDecoder(), "event: only\n\nid: 3\n\n") == []


def test_retry_field_requires_digits():
    decoder = SSEDecoder()
    decoder.feed("retry: 1500")
    assert decoder.retry == 1500
    decoder.feed("retry: soon")
    assert decoder.retry == 1500


def test_reset_drops_partial_event_but_keeps_last_id():
    decoder = SSEDecoder()
    _feed_all(decoder, "id: 4\ndata: partial")
    decoder.reset()
    assert decoder.feed("") is None
    assert decoder.last_event_id == "4"
