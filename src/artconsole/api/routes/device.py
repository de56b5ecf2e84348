"""API routes for the shared device console."""

from __future__ import annotations

import asyncio
from datetime import datetime

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from artconsole.core import pool
from artconsole.core.sink import AutoConfirm
from artconsole.exceptions import (
    AlreadyConnectedError,
    ArtConsoleError,
    EmptyCommandError,
    NotConnectedError,
    TransportError,
    TransportUnavailableError,
)
from artconsole.models.commands import NetworkSettings
from artconsole.models.state import DeviceState
from artconsole.transport.serial import scan_ports

router = APIRouter(prefix="/api", tags=["device"])

_STATUS_CODES: list[tuple[type[ArtConsoleError], int]] = [
    (NotConnectedError, 409),
    (AlreadyConnectedError, 409),
    (EmptyCommandError, 422),
    (TransportUnavailableError, 503),
    (TransportError, 502),
]


class ConnectionStatus(BaseModel):
    connected: bool
    state: str
    port: str | None = None


class StateResponse(BaseModel):
    summary: str
    state: DeviceState


class LogEntryResponse(BaseModel):
    timestamp: datetime
    kind: str
    message: str


class CommandResult(BaseModel):
    sent: bool


def _http_error(exc: ArtConsoleError) -> HTTPException:
    for exc_type, status in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return HTTPException(status_code=status, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def _status() -> ConnectionStatus:
    connection = pool.get_console().connection
    return ConnectionStatus(
        connected=connection.is_connected,
        state=connection.state.value,
        port=connection.port,
    )


@router.get("/ports")
async def list_ports() -> list[str]:
    """Scan for serial ports."""
    try:
        return await asyncio.to_thread(scan_ports)
    except TransportUnavailableError as exc:
        raise _http_error(exc) from exc


@router.get("/device")
async def get_status() -> ConnectionStatus:
    return _status()


@router.post("/device/connect")
async def connect(
    port: str | None = Query(None, description="Serial port path; first available if omitted"),
) -> ConnectionStatus:
    """Open the serial connection to the board."""
    try:
        pool.select_port(port)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    try:
        opened = await pool.get_console().connect()
    except ArtConsoleError as exc:
        raise _http_error(exc) from exc
    if not opened:
        raise HTTPException(status_code=502, detail="Error opening serial port; see log")
    return _status()


@router.post("/device/disconnect")
async def disconnect() -> ConnectionStatus:
    await pool.get_console().disconnect()
    return _status()


@router.get("/device/state")
async def get_state() -> StateResponse:
    """Last-known device state and the latest summary line."""
    console = pool.get_console()
    return StateResponse(summary=console.summary, state=console.state)


@router.get("/device/log")
async def get_log(
    since: int = Query(0, ge=0, description="Index of the first entry to return"),
) -> list[LogEntryResponse]:
    entries = pool.get_console().log.entries[since:]
    return [
        LogEntryResponse(timestamp=e.timestamp, kind=e.kind.value, message=e.message)
        for e in entries
    ]


@router.post("/device/get-net")
async def get_net() -> CommandResult:
    """Ask the board to report its network state."""
    try:
        await pool.get_console().request_status()
    except ArtConsoleError as exc:
        raise _http_error(exc) from exc
    return CommandResult(sent=True)


@router.post("/device/reboot")
async def reboot() -> CommandResult:
    try:
        sent = await pool.get_console().reboot(AutoConfirm())
    except ArtConsoleError as exc:
        raise _http_error(exc) from exc
    return CommandResult(sent=sent)


@router.post("/device/network")
async def set_network(settings: NetworkSettings) -> CommandResult:
    """Push new network settings; empty fields are left unchanged."""
    try:
        sent = await pool.get_console().save_network(settings, AutoConfirm())
    except ArtConsoleError as exc:
        raise _http_error(exc) from exc
    return CommandResult(sent=sent)
