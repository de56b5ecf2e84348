"""CLI commands that talk to the board over serial."""

from __future__ import annotations

import asyncio
import json
from typing import Awaitable, Callable

import click

from artconsole.core.console import DeviceConsole
from artconsole.core.sink import AutoConfirm, ConfirmationGate
from artconsole.exceptions import ArtConsoleError
from artconsole.models.commands import NetworkSettings
from artconsole.models.log import LogEntry
from artconsole.settings import ENV_PORT
from artconsole.transport.base import SerialConfig

port_option = click.option(
    "--port", "-p", envvar=ENV_PORT, default=None,
    help="Serial port (e.g. /dev/ttyUSB0 or COM3); first available if omitted",
)
yes_option = click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")


class EchoSink:
    """Prints console activity to the terminal."""

    def __init__(self, json_output: bool = False) -> None:
        self._json_output = json_output
        self.report_received = asyncio.Event()

    def append_log(self, entry: LogEntry) -> None:
        if self._json_output:
            click.echo(json.dumps({
                "timestamp": entry.timestamp.isoformat(),
                "kind": entry.kind.value,
                "message": entry.message,
            }))
        else:
            click.echo(entry.render())

    def set_connected(self, connected: bool) -> None:
        pass

    def set_state_summary(self, text: str) -> None:
        self.report_received.set()

    def set_form_field(self, name: str, value: str) -> None:
        pass


class ClickConfirm:
    """Confirmation gate backed by ``click.confirm``."""

    async def confirm(self, prompt: str) -> bool:
        return await asyncio.to_thread(click.confirm, prompt, default=False)


def _run(
    ctx: click.Context,
    port: str | None,
    action: Callable[[DeviceConsole, EchoSink], Awaitable[None]],
) -> None:
    """Connect, run ``action``, always disconnect."""

    async def main() -> None:
        console = DeviceConsole(config=SerialConfig(port=port))
        sink = EchoSink(json_output=ctx.obj.get("json_output", False))
        console.sink.attach(sink)
        if not await console.connect():
            raise click.ClickException("Could not open the serial port.")
        try:
            await action(console, sink)
        finally:
            await console.disconnect()

    try:
        asyncio.run(main())
    except ArtConsoleError as exc:
        raise click.ClickException(str(exc)) from exc


async def _wait_for_report(sink: EchoSink, seconds: float) -> bool:
    try:
        await asyncio.wait_for(sink.report_received.wait(), timeout=seconds)
    except asyncio.TimeoutError:
        return False
    return True


def _print_state(ctx: click.Context, console: DeviceConsole) -> None:
    if ctx.obj.get("json_output"):
        click.echo(json.dumps(console.state.model_dump(exclude_none=True), indent=2))
    else:
        click.echo(console.summary or "(empty state report)")


@click.command()
@port_option
@click.option("--get-net", "request_status", is_flag=True,
              help="Ask the board for its network state after connecting")
@click.pass_context
def monitor(ctx: click.Context, port: str | None, request_status: bool) -> None:
    """Print everything the board sends until it disconnects or Ctrl-C."""

    async def action(console: DeviceConsole, sink: EchoSink) -> None:
        if request_status:
            await console.request_status()
        task = console.connection.read_task
        if task is not None:
            await task

    try:
        _run(ctx, port, action)
    except KeyboardInterrupt:
        pass


@click.command("get-net")
@port_option
@click.option("--wait", type=float, default=3.0, show_default=True,
              help="Seconds to wait for the state reply")
@click.pass_context
def get_net(ctx: click.Context, port: str | None, wait: float) -> None:
    """Request and print the board's network state."""

    async def action(console: DeviceConsole, sink: EchoSink) -> None:
        await console.request_status()
        if not await _wait_for_report(sink, wait):
            raise click.ClickException(f"No state report within {wait:g}s.")
        _print_state(ctx, console)

    _run(ctx, port, action)


@click.command()
@port_option
@yes_option
@click.pass_context
def reboot(ctx: click.Context, port: str | None, yes: bool) -> None:
    """Send REBOOT to the board."""
    gate: ConfirmationGate = AutoConfirm() if yes else ClickConfirm()

    async def action(console: DeviceConsole, sink: EchoSink) -> None:
        if not await console.reboot(gate):
            click.echo("Aborted.")

    _run(ctx, port, action)


@click.command("set-net")
@port_option
@click.option("--ssid", default="", help="Wi-Fi network name")
@click.option("--password", default="", help="Wi-Fi password")
@click.option("--ip", default="", help="Static IP address")
@click.option("--gateway", default="", help="Gateway address")
@click.option("--subnet-mask", default="", help="Subnet mask")
@click.option("--wait", type=float, default=10.0, show_default=True,
              help="Seconds to wait for the updated state report")
@yes_option
@click.pass_context
def set_net(
    ctx: click.Context,
    port: str | None,
    ssid: str,
    password: str,
    ip: str,
    gateway: str,
    subnet_mask: str,
    wait: float,
    yes: bool,
) -> None:
    """Send new network settings. Omitted fields stay unchanged."""
    settings = NetworkSettings(
        ssid=ssid, password=password, ip=ip, gateway=gateway, subnet_mask=subnet_mask
    )
    gate: ConfirmationGate = AutoConfirm() if yes else ClickConfirm()

    # Validate before touching the port.
    from artconsole.protocol.commands import network_settings
    try:
        network_settings(settings)
    except ArtConsoleError as exc:
        raise click.UsageError(str(exc)) from exc

    async def action(console: DeviceConsole, sink: EchoSink) -> None:
        if not await console.save_network(settings, gate):
            click.echo("Aborted.")
            return
        if await _wait_for_report(sink, wait):
            _print_state(ctx, console)
        else:
            click.echo("Settings sent; the board did not report back yet.")

    _run(ctx, port, action)
