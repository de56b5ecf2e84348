"""Core layer: connection lifecycle and the console session."""

from artconsole.core.connection import ConnectionManager, ConnectionState
from artconsole.core.console import DeviceConsole
from artconsole.core.console_log import ConsoleLog
from artconsole.core.sink import (
    AutoConfirm,
    BroadcastSink,
    ConfirmationGate,
    PresentationSink,
)

__all__ = [
    "AutoConfirm",
    "BroadcastSink",
    "ConfirmationGate",
    "ConnectionManager",
    "ConnectionState",
    "ConsoleLog",
    "DeviceConsole",
    "PresentationSink",
]
