"""Protocol layer: line framing, classification, state decoding, command encoding."""

from artconsole.protocol.classifier import ClassifiedLine, LineKind, classify_line
from artconsole.protocol.commands import (
    encode_command,
    network_settings,
    reboot,
    serialize_command,
    status_request,
)
from artconsole.protocol.framing import LineBuffer, split_lines
from artconsole.protocol.state import decode_state, form_values

__all__ = [
    "ClassifiedLine",
    "LineBuffer",
    "LineKind",
    "classify_line",
    "decode_state",
    "encode_command",
    "form_values",
    "network_settings",
    "reboot",
    "serialize_command",
    "split_lines",
    "status_request",
]
