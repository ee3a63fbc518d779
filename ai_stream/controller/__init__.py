"""Connection controller package.

Exposes the lifecycle state machine and its construction options.
"""

from .controller_options import ControllerOptions
from .controller_fields import ControllerFields
from .connection_controller import CALLBACK_ERROR, MESSAGE_DROPPED, ConnectionController

__all__ = [
    "ControllerOptions",
    "ControllerFields",
    "ConnectionController",
    "CALLBACK_ERROR",
    "MESSAGE_DROPPED",
]
