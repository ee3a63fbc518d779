"""Transports delivering stream signals to the connection controller.

Exposes the transport abstraction, its signals, the concrete httpx-based
implementations and the default factory under one namespace.
"""

from .signals import Completed, Failed, MessageReceived, Opened, Signal, SignalListener
from .transport_base import BaseTransport, ReadyState, TransportKind
from .sse_decoder import SSEDecoder, ServerSentEvent
from .event_source import EventSourceTransport
from .single_request import SingleRequestTransport
from .factory import TransportFactory, default_transport_factory

__all__ = [
    "Opened",
    "MessageReceived",
    "Failed",
    "Completed",
    "Signal",
    "SignalListener",
    "BaseTransport",
    "ReadyState",
    "TransportKind",
    "SSEDecoder",
    "ServerSentEvent",
    "EventSourceTransport",
    "SingleRequestTransport",
    "TransportFactory",
    "default_transport_factory",
]
