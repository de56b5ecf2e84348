"""Command builders and line encoding for outbound messages."""

from __future__ import annotations

import json

from artconsole.exceptions import EmptyCommandError
from artconsole.models.commands import Command, CommandKind, NetworkSettings
from artconsole.protocol.framing import ENCODING, LINE_TERMINATOR


def status_request() -> Command:
    """Ask the device to report its network state."""
    return Command(kind=CommandKind.GET_NET)


def reboot() -> Command:
    return Command(kind=CommandKind.REBOOT)


def network_settings(settings: NetworkSettings) -> Command:
    """Build a SET_NET command from the non-empty form fields.

    Text fields are sent trimmed. The password is sent as typed, since
    leading or trailing spaces can be part of a passphrase, but a
    whitespace-only password counts as empty.

    Raises:
        EmptyCommandError: If every field is empty.
    """
    params: dict[str, str] = {}
    for wire_name, value in (
        ("ssid", settings.ssid),
        ("pwd", settings.password),
        ("ip", settings.ip),
        ("gw", settings.gateway),
        ("sn", settings.subnet_mask),
    ):
        if not value.strip():
            continue
        params[wire_name] = value if wire_name == "pwd" else value.strip()

    if not params:
        raise EmptyCommandError()
    return Command(kind=CommandKind.SET_NET, params=params)


def serialize_command(command: Command) -> str:
    """Compact JSON text of a command, without terminator."""
    return json.dumps(command.payload(), separators=(",", ":"), ensure_ascii=False)


def encode_command(command: Command) -> bytes:
    """Encode a command as one newline-terminated UTF-8 line."""
    return (serialize_command(command) + LINE_TERMINATOR).encode(ENCODING)
