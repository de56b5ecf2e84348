"""Shared console instance.

The board has one serial port, so the process keeps a single
``DeviceConsole``. API routes and UI pages both import from here to avoid
opening the port twice.
"""

from __future__ import annotations

import re
import sys
import threading
from dataclasses import replace

from artconsole.core.console import DeviceConsole
from artconsole.transport.base import SerialConfig
from artconsole.utils.logging import get_logger

logger = get_logger(__name__)

_lock = threading.Lock()
_console: DeviceConsole | None = None
_config = SerialConfig()

_SERIAL_PORT_PATTERNS: dict[str, re.Pattern] = {
    "win32": re.compile(r"^COM\d{1,3}$"),
    "linux": re.compile(r"^/dev/tty(USB|ACM|S)\d{1,3}$"),
    "darwin": re.compile(r"^/dev/(tty|cu)\.(usbserial|usbmodem|SLAB_USBtoUART|wchusbserial)[\w.\-]*$"),
}


def validate_port(port: str) -> None:
    """Validate that port looks like a real serial port path.

    Raises:
        ValueError: If port does not match expected serial port patterns.
    """
    if not port or not isinstance(port, str):
        raise ValueError("Serial port path must be a non-empty string")
    pattern = _SERIAL_PORT_PATTERNS.get(sys.platform)
    if pattern and not pattern.match(port):
        raise ValueError(f"Invalid serial port path: {port}")


def configure(config: SerialConfig) -> None:
    """Set the serial config used by the shared console."""
    global _config
    with _lock:
        _config = config
        if _console is not None:
            _console.connection.config = config


def select_port(port: str | None) -> None:
    """Choose the port for the next connect; None means auto-select."""
    if port is not None:
        validate_port(port)
    configure(replace(_config, port=port))


def get_console() -> DeviceConsole:
    """Get or create the shared console."""
    global _console
    with _lock:
        if _console is None:
            logger.info("console_created", port=_config.port)
            _console = DeviceConsole(config=_config)
        return _console


async def shutdown() -> None:
    """Disconnect and drop the shared console."""
    global _console
    with _lock:
        console, _console = _console, None
    if console is not None:
        logger.info("console_shutdown")
        await console.connection.disconnect(silent=True)
