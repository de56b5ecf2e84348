"""artconsole CLI - serial console for Art-Net DMX nodes."""

from __future__ import annotations

import json

import click

from artconsole.settings import DEFAULT_HOST, DEFAULT_HTTP_PORT, ENV_HOST, ENV_HTTP_PORT, ENV_PORT
from artconsole.utils.logging import setup_logging


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.pass_context
def cli(ctx: click.Context, debug: bool, json_output: bool) -> None:
    """artconsole - configure Art-Net nodes over USB serial."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["json_output"] = json_output
    setup_logging(level="DEBUG" if debug else "WARNING", json_output=json_output)


@cli.command()
@click.pass_context
def ports(ctx: click.Context) -> None:
    """List serial ports."""
    from artconsole.exceptions import TransportUnavailableError
    from artconsole.transport.serial import scan_ports

    try:
        found = scan_ports()
    except TransportUnavailableError as exc:
        raise click.ClickException(str(exc)) from exc

    if ctx.obj.get("json_output"):
        click.echo(json.dumps(found, indent=2))
    elif not found:
        click.echo("No serial ports found.")
    else:
        click.echo(f"Found {len(found)} port(s):")
        for port in found:
            click.echo(f"  {port}")


@cli.command()
@click.option("--host", default=DEFAULT_HOST, envvar=ENV_HOST, show_default=True,
              help="Bind address (0.0.0.0 for network access)")
@click.option("--http-port", type=int, default=DEFAULT_HTTP_PORT, envvar=ENV_HTTP_PORT,
              show_default=True, help="HTTP port")
@click.option("--port", "-p", envvar=ENV_PORT, default=None,
              help="Serial port to preselect (e.g. /dev/ttyUSB0 or COM3)")
@click.option("--no-ui", is_flag=True, help="API only, no web console")
def serve(host: str, http_port: int, port: str | None, no_ui: bool) -> None:
    """Start the web server (API + console)."""
    import uvicorn

    from artconsole.api.app import create_app
    from artconsole.settings import ConsoleSettings

    settings = ConsoleSettings.from_env()
    settings = ConsoleSettings(
        serial_port=port,
        host=host,
        http_port=http_port,
        storage_secret=settings.storage_secret,
    )
    app = create_app(settings, enable_ui=not no_ui)
    uvicorn.run(app, host=host, port=http_port)


# Register device commands
from artconsole.cli.device import get_net, monitor, reboot, set_net  # noqa: E402

cli.add_command(monitor)
cli.add_command(get_net)
cli.add_command(reboot)
cli.add_command(set_net)


if __name__ == "__main__":
    cli()
