"""Console page - connect, show device state, edit network settings, log."""

from __future__ import annotations

from nicegui import run, ui

from artconsole.core import pool
from artconsole.core.console import DeviceConsole
from artconsole.exceptions import ArtConsoleError, TransportUnavailableError
from artconsole.models.commands import NetworkSettings
from artconsole.models.log import LogEntry
from artconsole.settings import FLASHER_URL
from artconsole.transport.serial import scan_ports
from artconsole.ui.components.common import (
    ConfirmDialog,
    card_header,
    card_style,
    connection_badge,
    page_header,
    set_connection_badge,
)
from artconsole.ui.layout import page_layout
from artconsole.ui.theme import COLORS
from artconsole.utils.logging import get_logger

logger = get_logger(__name__)

AUTO_PORT = "auto"
LOG_MAX_LINES = 2000


class PageSink:
    """Presentation sink bound to the elements of one browser tab."""

    def __init__(
        self,
        log: ui.log,
        badge: ui.label,
        summary: ui.label,
        fields: dict[str, ui.input],
        connected_only: list[ui.element],
        disconnected_only: list[ui.element],
    ) -> None:
        self._log = log
        self._badge = badge
        self._summary = summary
        self._fields = fields
        self._connected_only = connected_only
        self._disconnected_only = disconnected_only

    def append_log(self, entry: LogEntry) -> None:
        self._log.push(entry.render())

    def set_connected(self, connected: bool) -> None:
        set_connection_badge(self._badge, connected)
        for element in self._connected_only:
            element.set_enabled(connected)
        for element in self._disconnected_only:
            element.set_enabled(not connected)

    def set_state_summary(self, text: str) -> None:
        self._summary.text = text or "--"

    def set_form_field(self, name: str, value: str) -> None:
        field = self._fields.get(name)
        if field is not None:
            field.value = value


def console_page() -> None:
    """Render the console page."""

    def content():
        _console_content(pool.get_console())

    page_layout("Serial Console", content)


def _console_content(console: DeviceConsole) -> None:
    page_header(
        "Device Console",
        "USB serial at 115200 8N1. State replies are JSON lines; everything else is logged.",
    )
    gate = ConfirmDialog()

    # Connection
    with ui.card().classes("w-full p-4").style(card_style()):
        card_header("Connection", "usb")
        with ui.row().classes("items-end gap-4"):
            configured = console.connection.config.port
            port_select = ui.select(
                _port_options([configured] if configured else []),
                value=configured or AUTO_PORT,
                label="Serial port",
            ).classes("w-64")
            connect_btn = ui.button("Connect", icon="link").style(
                f"background: {COLORS.green}"
            )
            disconnect_btn = ui.button("Disconnect", icon="link_off").style(
                f"background: {COLORS.red}"
            )
            ui.space()
            badge = connection_badge()

    # Device state
    with ui.card().classes("w-full p-4 mt-4").style(card_style()):
        card_header("Device State", "info")
        summary = ui.label(console.summary or "--").classes("text-body1").style(
            f"color: {COLORS.text_primary}"
        )

    # Network settings
    with ui.card().classes("w-full p-4 mt-4").style(card_style()):
        card_header("Network Settings", "wifi")
        fields: dict[str, ui.input] = {}
        with ui.row().classes("gap-4"):
            fields["ssid"] = ui.input("Wi-Fi SSID").classes("w-56")
            fields["pwd"] = ui.input(
                "Wi-Fi password", password=True, password_toggle_button=True
            ).classes("w-56")
        with ui.row().classes("gap-4"):
            fields["ip"] = ui.input("IP address").classes("w-40")
            fields["gw"] = ui.input("Gateway").classes("w-40")
            fields["sn"] = ui.input("Subnet mask").classes("w-40")
        for name, value in console.form.items():
            if name in fields:
                fields[name].value = value

        with ui.row().classes("gap-4 mt-2"):
            get_btn = ui.button("Get Network", icon="refresh").style(
                f"background: {COLORS.blue}"
            )
            save_btn = ui.button("Save Network", icon="save").style(
                f"background: {COLORS.blue}"
            )
            reboot_btn = ui.button("Reboot", icon="restart_alt").style(
                f"background: {COLORS.yellow}"
            )
            ui.space()
            ui.button(
                "Open Flasher",
                icon="open_in_new",
                on_click=lambda: ui.navigate.to(FLASHER_URL, new_tab=True),
            ).props("flat")

    # Log
    with ui.card().classes("w-full p-4 mt-4").style(card_style()):
        card_header("Log", "terminal")
        log = ui.log(max_lines=LOG_MAX_LINES).classes("console-log w-full h-80")
        for entry in console.log.entries[-LOG_MAX_LINES:]:
            log.push(entry.render())

    sink = PageSink(
        log,
        badge,
        summary,
        fields,
        connected_only=[disconnect_btn, get_btn, save_btn, reboot_btn],
        disconnected_only=[connect_btn, port_select],
    )
    sink.set_connected(console.is_connected)
    console.sink.attach(sink)
    ui.context.client.on_disconnect(lambda: console.sink.detach(sink))

    async def refresh_ports():
        try:
            ports = await run.io_bound(scan_ports)
        except TransportUnavailableError as exc:
            ui.notify(str(exc), type="negative")
            return
        options = _port_options(ports)
        current = port_select.value if port_select.value in options else AUTO_PORT
        port_select.set_options(options, value=current)

    async def do_connect():
        try:
            pool.select_port(None if port_select.value == AUTO_PORT else port_select.value)
            await console.connect()
        except (ArtConsoleError, ValueError) as exc:
            logger.warning("ui_connect_failed", error=str(exc))
            ui.notify(str(exc), type="negative")

    async def do_disconnect():
        await console.disconnect()

    async def do_get():
        await _run_action(console.request_status())

    async def do_save():
        settings = NetworkSettings(
            ssid=fields["ssid"].value or "",
            password=fields["pwd"].value or "",
            ip=fields["ip"].value or "",
            gateway=fields["gw"].value or "",
            subnet_mask=fields["sn"].value or "",
        )
        await _run_action(console.save_network(settings, gate))

    async def do_reboot():
        await _run_action(console.reboot(gate))

    connect_btn.on_click(do_connect)
    disconnect_btn.on_click(do_disconnect)
    get_btn.on_click(do_get)
    save_btn.on_click(do_save)
    reboot_btn.on_click(do_reboot)

    ui.timer(0.1, refresh_ports, once=True)


def _port_options(ports: list[str]) -> dict[str, str]:
    return {AUTO_PORT: "First available", **{p: p for p in ports}}


async def _run_action(action) -> None:
    """Await a console action and notify on user-facing errors."""
    try:
        await action
    except ArtConsoleError as exc:
        ui.notify(str(exc), type="warning")
