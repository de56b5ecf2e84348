"""Serial port transport implemented on pyserial."""

from __future__ import annotations

import asyncio
from dataclasses import replace

from artconsole.exceptions import (
    OpenFailedError,
    ReadError,
    TransportUnavailableError,
    WriteError,
)
from artconsole.transport.base import ReadResult, SerialConfig, Transport
from artconsole.utils.logging import get_logger

logger = get_logger(__name__)


def _load_pyserial():
    try:
        import serial
    except ImportError as exc:
        raise TransportUnavailableError(
            "Serial support is not available. Install pyserial.", exc
        ) from exc
    return serial


def scan_ports() -> list[str]:
    """Scan for available COM/ttyUSB/ttyACM ports.

    Raises:
        TransportUnavailableError: If pyserial is not installed.
    """
    _load_pyserial()
    from serial.tools.list_ports import comports

    return sorted(p.device for p in comports())


class SerialTransport(Transport):
    """Transport over a local serial port.

    pyserial is blocking, so every call runs in a worker thread. Reads use
    no timeout; ``cancel_read()`` is what unblocks a pending read.
    """

    def __init__(self) -> None:
        self._serial = None

    @property
    def is_open(self) -> bool:
        return self._serial is not None and self._serial.is_open

    async def request_port(self, config: SerialConfig) -> SerialConfig:
        if config.port:
            _load_pyserial()
            return config

        ports = await asyncio.to_thread(scan_ports)
        if not ports:
            raise TransportUnavailableError(
                "No serial port found. Connect the board over USB and retry."
            )
        logger.info("serial_port_selected", port=ports[0], available=len(ports))
        return replace(config, port=ports[0])

    async def open(self, config: SerialConfig) -> None:
        serial = _load_pyserial()
        logger.info(
            "serial_opening",
            port=config.port,
            baud=config.baud_rate,
            framing=f"{config.data_bits}{config.parity.value}{config.stop_bits}",
        )
        try:
            self._serial = await asyncio.to_thread(
                serial.Serial,
                port=config.port,
                baudrate=config.baud_rate,
                bytesize=config.data_bits,
                parity=config.parity.value,
                stopbits=config.stop_bits,
                timeout=None,
            )
        except (serial.SerialException, ValueError, OSError) as exc:
            raise OpenFailedError(str(exc), exc) from exc

    async def read(self) -> ReadResult:
        handle = self._serial
        if handle is None:
            return ReadResult(end_of_stream=True)
        serial = _load_pyserial()
        try:
            data = await asyncio.to_thread(lambda: handle.read(handle.in_waiting or 1))
        except (serial.SerialException, OSError, TypeError) as exc:
            raise ReadError(str(exc), exc) from exc
        if not data:
            return ReadResult(end_of_stream=True)
        return ReadResult(data=data)

    async def write(self, data: bytes) -> None:
        handle = self._serial
        if handle is None:
            raise WriteError("Serial port is not open")
        serial = _load_pyserial()
        try:
            await asyncio.to_thread(handle.write, data)
        except (serial.SerialException, OSError) as exc:
            raise WriteError(str(exc), exc) from exc

    async def cancel_read(self) -> None:
        if self._serial is not None:
            self._serial.cancel_read()

    async def close(self) -> None:
        handle, self._serial = self._serial, None
        if handle is not None:
            await asyncio.to_thread(handle.close)
