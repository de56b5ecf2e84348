"""Device console session: ties the protocol engine to a user interface."""

from __future__ import annotations

from artconsole.core.connection import ConnectionManager, ConnectionState
from artconsole.core.console_log import ConsoleLog
from artconsole.core.sink import BroadcastSink, ConfirmationGate
from artconsole.exceptions import NotConnectedError, OpenFailedError
from artconsole.models.commands import NetworkSettings
from artconsole.models.state import DeviceState
from artconsole.protocol import commands
from artconsole.protocol.classifier import LineKind, classify_line
from artconsole.protocol.state import decode_state, form_values
from artconsole.transport.base import SerialConfig, Transport
from artconsole.utils.logging import get_logger

logger = get_logger(__name__)

REBOOT_PROMPT = "Send REBOOT command to board?"
SET_NET_PROMPT = "Send new network settings to board? It may change its IP."


class DeviceConsole:
    """One console session against one device.

    Holds the connection, the user-visible log, the last-known device
    state and the presentation sink. Every user action is a coroutine.

    User-facing errors (``TransportUnavailableError``, ``NotConnectedError``,
    ``EmptyCommandError``) and ``WriteError`` propagate to the caller, which
    decides how to show them. Open failures are already in the log, so
    ``connect()`` reports them by returning False.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        config: SerialConfig | None = None,
    ) -> None:
        if transport is None:
            from artconsole.transport.serial import SerialTransport
            transport = SerialTransport()

        self.state = DeviceState()
        self.summary = ""
        self.form: dict[str, str] = {}
        self.log = ConsoleLog()
        self.sink = BroadcastSink()
        self.log.subscribe(self.sink.append_log)
        self.connection = ConnectionManager(
            transport, self.handle_line, self.log, self.sink, config
        )

    @property
    def is_connected(self) -> bool:
        return self.connection.is_connected

    @property
    def connection_state(self) -> ConnectionState:
        return self.connection.state

    # --- Connection ---

    async def connect(self) -> bool:
        """Open the serial port.

        Returns False if the open call failed or a disconnect superseded it.
        """
        try:
            return await self.connection.connect()
        except OpenFailedError:
            return False

    async def disconnect(self) -> None:
        """User-initiated disconnect."""
        await self.connection.disconnect(silent=False)

    # --- Commands ---

    async def request_status(self) -> None:
        await self.connection.send(commands.status_request())

    async def reboot(self, gate: ConfirmationGate) -> bool:
        """Reboot the board after confirmation. Returns whether it was sent."""
        self._require_connection()
        if not await gate.confirm(REBOOT_PROMPT):
            return False
        await self.connection.send(commands.reboot())
        return True

    async def save_network(
        self, settings: NetworkSettings, gate: ConfirmationGate
    ) -> bool:
        """Push network settings after confirmation. Returns whether sent.

        The board reconnects to Wi-Fi and reports its new state on its own.
        """
        command = commands.network_settings(settings)
        self._require_connection()
        if not await gate.confirm(SET_NET_PROMPT):
            return False
        await self.connection.send(command)
        return True

    def _require_connection(self) -> None:
        if not self.connection.is_connected:
            raise NotConnectedError()

    # --- Inbound ---

    def handle_line(self, raw: str) -> None:
        """Classify one framed line and dispatch it."""
        line = classify_line(raw)
        if line.kind is LineKind.EMPTY:
            return
        if line.kind is LineKind.TEXT:
            self.log.inbound_text(line.text)
            return
        if line.kind is LineKind.MALFORMED:
            self.log.error(f"JSON parse error: {line.error} (line: {line.text})")
            return

        self.log.inbound_json(line.text)
        self.apply_report(decode_state(line.payload))

    def apply_report(self, report: DeviceState) -> None:
        """Merge a decoded report into the snapshot and update the view."""
        updated = self.state.merge(report)
        self.summary = report.summary()
        self.sink.set_state_summary(self.summary)
        for name, value in form_values(report).items():
            self.form[name] = value
            self.sink.set_form_field(name, value)
        logger.debug("device_state_updated", fields=sorted(updated))
