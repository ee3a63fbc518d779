"""Pytest configuration for the ai_stream test suite.

Provides fakes for the controller's external collaborators and isolates tests
from ``AI_STREAM_*`` environment variables present on the host.
"""

from __future__ import annotations

import os
from typing import Any, Callable, Iterator

import pytest

from ai_stream.controller import ConnectionController, ControllerOptions
from ai_stream.tests.helpers import CollectingSink, FakeTransportFactory, Recorder


@pytest.fixture(autouse=True)
def clean_ai_stream_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove ``AI_STREAM_*`` variables for the duration of a test."""

    for key in list(os.environ):
        if key.startswith("AI_STREAM_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture()
def sink() -> CollectingSink:
    return CollectingSink()


@pytest.fixture()
def factory() -> FakeTransportFactory:
    return FakeTransportFactory()


@pytest.fixture()
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture()
def make_controller(
    sink: CollectingSink,
    factory: FakeTransportFactory,
    recorder: Recorder,
) -> Callable[..., ConnectionController]:
    """Build a controller wired to the fake factory, sink and recorder."""

    def _make(**overrides: Any) -> ConnectionController:
        params: dict[str, Any] = {"base_url": "http://h", **recorder.callbacks()}
        params.update(overrides)
        controller = ConnectionController(
            ControllerOptions(**params),
            transport_factory=factory,
            log_sink=sink,
        )
        controller.subscribe(recorder.on_update)
        return controller

    return _make
