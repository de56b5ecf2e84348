"""Serial connection lifecycle and the background read loop."""

from __future__ import annotations

import asyncio
from enum import StrEnum
from typing import Callable

from artconsole.core.console_log import ConsoleLog
from artconsole.core.sink import PresentationSink
from artconsole.exceptions import (
    AlreadyConnectedError,
    NotConnectedError,
    OpenFailedError,
    ReadError,
)
from artconsole.models.commands import Command
from artconsole.protocol.commands import encode_command, serialize_command
from artconsole.protocol.framing import LineBuffer
from artconsole.transport.base import SerialConfig, Transport
from artconsole.utils.logging import get_logger

logger = get_logger(__name__)

LineHandler = Callable[[str], None]


class ConnectionState(StrEnum):
    """Lifecycle states of a ``ConnectionManager``."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    CLOSING = "closing"


class ConnectionManager:
    """Owns one transport, its line buffer and its read loop.

    At most one read loop is live per manager. Each connect starts a new
    generation; a read loop that wakes up after its generation was
    superseded or torn down exits without touching anything.

    Usage::

        manager = ConnectionManager(SerialTransport(), handle_line, log)
        await manager.connect()
        await manager.send(status_request())
        await manager.disconnect()
    """

    def __init__(
        self,
        transport: Transport,
        on_line: LineHandler,
        log: ConsoleLog,
        sink: PresentationSink | None = None,
        config: SerialConfig | None = None,
    ) -> None:
        self._transport = transport
        self._on_line = on_line
        self._log = log
        self._sink = sink
        self._config = config or SerialConfig()
        self._state = ConnectionState.DISCONNECTED
        self._buffer = LineBuffer()
        self._generation = 0
        self._read_task: asyncio.Task | None = None
        self._port: str | None = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    @property
    def port(self) -> str | None:
        """Port of the active connection, if any."""
        return self._port

    @property
    def config(self) -> SerialConfig:
        return self._config

    @config.setter
    def config(self, value: SerialConfig) -> None:
        self._config = value

    @property
    def read_task(self) -> asyncio.Task | None:
        return self._read_task

    async def connect(self) -> bool:
        """Select and open the port, then start the read loop.

        Returns:
            False if disconnect() ran while the open was pending and the
            new handle was discarded.

        Raises:
            AlreadyConnectedError: If not currently disconnected.
            TransportUnavailableError: If no serial capability; no state change.
            OpenFailedError: If the open call failed; logged and torn down.
        """
        if self._state is not ConnectionState.DISCONNECTED:
            raise AlreadyConnectedError(f"Connection is {self._state.value}")

        config = await self._transport.request_port(self._config)

        self._state = ConnectionState.CONNECTING
        self._generation += 1
        generation = self._generation
        try:
            await self._transport.open(config)
        except OpenFailedError as exc:
            logger.warning("serial_open_failed", port=config.port, error=str(exc))
            self._log.error(f"Error opening serial port: {exc}")
            await self.disconnect(silent=True)
            raise

        if generation != self._generation:
            # disconnect() ran while the open was pending
            logger.info("serial_open_superseded", port=config.port)
            await self._close_transport()
            return False

        self._buffer.reset()
        self._port = config.port
        self._state = ConnectionState.CONNECTED
        self._set_indicator(True)
        self._log.info("Serial port opened.")
        logger.info("serial_connected", port=config.port)

        self._read_task = asyncio.create_task(
            self._read_loop(generation), name=f"serial-read-{generation}"
        )
        return True

    async def disconnect(self, silent: bool = False) -> None:
        """Tear the connection down. Idempotent and never raises.

        Args:
            silent: Skip the user-visible "closed" entry. Used for teardowns
                triggered by errors or end-of-stream.
        """
        if self._state is ConnectionState.DISCONNECTED:
            self._set_indicator(False)
            return
        if self._state is ConnectionState.CLOSING:
            return

        was_connected = self._state is ConnectionState.CONNECTED
        self._state = ConnectionState.CLOSING
        self._generation += 1
        task, self._read_task = self._read_task, None

        try:
            await self._transport.cancel_read()
        except Exception as exc:
            logger.debug("serial_cancel_read_error", error=str(exc))

        if task is not None and task is not asyncio.current_task():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

        await self._close_transport()

        port, self._port = self._port, None
        self._state = ConnectionState.DISCONNECTED
        self._set_indicator(False)
        logger.info("serial_disconnected", port=port, silent=silent)
        if was_connected and not silent:
            self._log.info("Serial port closed.")

    async def send(self, command: Command) -> None:
        """Encode and write a command.

        Raises:
            NotConnectedError: If there is no active connection.
            WriteError: If the transport write failed.
        """
        if self._state is not ConnectionState.CONNECTED:
            raise NotConnectedError()
        self._log.outbound(serialize_command(command))
        await self._transport.write(encode_command(command))
        logger.debug("serial_command_sent", cmd=command.kind.value)

    def _is_current(self, generation: int) -> bool:
        return (
            generation == self._generation
            and self._state is ConnectionState.CONNECTED
        )

    async def _read_loop(self, generation: int) -> None:
        logger.debug("read_loop_started", generation=generation)
        while True:
            try:
                result = await self._transport.read()
            except ReadError as exc:
                if not self._is_current(generation):
                    return
                logger.warning("serial_read_error", error=str(exc))
                self._log.error(f"Serial read error: {exc}")
                break

            if not self._is_current(generation):
                return
            if result.end_of_stream:
                self._log.info("Serial read done.")
                break

            try:
                for line in self._buffer.feed_bytes(result.data):
                    self._on_line(line)
            except Exception as exc:
                if not self._is_current(generation):
                    return
                logger.exception("line_handler_error", error=str(exc))
                self._log.error(f"Error handling serial line: {exc}")
                break

        await self.disconnect(silent=True)

    async def _close_transport(self) -> None:
        try:
            await self._transport.close()
        except Exception as exc:
            logger.debug("serial_close_error", error=str(exc))

    def _set_indicator(self, connected: bool) -> None:
        if self._sink is not None:
            try:
                self._sink.set_connected(connected)
            except Exception as exc:
                logger.warning("connection_indicator_error", error=str(exc))
