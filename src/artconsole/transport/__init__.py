"""Transport layer for serial communication."""

from artconsole.transport.base import Parity, ReadResult, SerialConfig, Transport
from artconsole.transport.serial import SerialTransport, scan_ports

__all__ = [
    "Parity",
    "ReadResult",
    "SerialConfig",
    "SerialTransport",
    "Transport",
    "scan_ports",
]
