"""Unit tests for the per-instance observable state store."""
from __future__ import annotations

from ai_stream.base.models import ConnectionStatus
from ai_stream.base.state_store import StateStore


def test_every_update_notifies_every_subscriber_in_order():
    store = StateStore()
    seen_a, seen_b = [], []
    store.subscribe(lambda u: seen_a.append(u.state.status))
    store.subscribe(lambda u: seen_b.append((u.transport, u.state.status)))

    store.update("t1", status=ConnectionStatus.OPEN)
    store.update("t1", status=ConnectionStatus.OPEN)  # no deduplication
    store.update(None, status=ConnectionStatus.CLOSED)

    assert seen_a == [ConnectionStatus.OPEN, ConnectionStatus.OPEN, ConnectionStatus.CLOSED]
    assert seen_b[-1] == (None, ConnectionStatus.CLOSED)


def test_update_is_shallow_merge():
    store = StateStore()
    store.update(None, status=ConnectionStatus.OPEN, stream_message={"a": 1})
    store.update(None, status=ConnectionStatus.ERROR)
    assert store.state.stream_message == {"a": 1}
    assert store.state.status is ConnectionStatus.ERROR


def test_unsubscribe_and_clear():
    store = StateStore()
    calls = []
    listener = calls.append
    unsubscribe = store.subscribe(listener)
    unsubscribe()
    unsubscribe()  # unknown listener is ignored
    store.update(None, status=ConnectionStatus.OPEN)
    assert calls == []

    store.subscribe(listener)
    store.subscribe(lambda u: None)
    store.clear_subscribers()
    assert store.subscriber_count == 0


def test_raising_subscriber_does_not_block_others():
    store = StateStore()
    calls = []

    def _boom(update):
        raise RuntimeError("observer failed")

    store.subscribe(_boom)
    store.subscribe(calls.append)
    store.update(None, status=ConnectionStatus.OPEN)
    assert len(calls) == 1


def test_stores_are_independent():
    a, b = StateStore(), StateStore()
    a.update(None, status=ConnectionStatus.OPEN)
    assert b.state.status is ConnectionStatus.IDLE
