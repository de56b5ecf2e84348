"""Pydantic and dataclass models shared across layers."""

from artconsole.models.commands import Command, CommandKind, NetworkSettings
from artconsole.models.log import LogEntry, LogKind
from artconsole.models.state import DeviceState

__all__ = [
    "Command",
    "CommandKind",
    "DeviceState",
    "LogEntry",
    "LogKind",
    "NetworkSettings",
]
