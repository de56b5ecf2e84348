"""Unit tests for the REST API routes."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from artconsole.api.app import create_app
from artconsole.core import pool
from artconsole.core.console import DeviceConsole
from artconsole.exceptions import OpenFailedError, TransportUnavailableError
from artconsole.settings import ConsoleSettings
from artconsole.transport.base import SerialConfig
from fakes import FakeTransport


@pytest.fixture
def console(monkeypatch, transport) -> DeviceConsole:
    c = DeviceConsole(transport=transport)
    monkeypatch.setattr(pool, "_config", SerialConfig())
    monkeypatch.setattr(pool, "_console", c)
    return c


@pytest.fixture
def client(console):
    app = create_app(ConsoleSettings(serial_port=None), enable_ui=False)
    with TestClient(app) as test_client:
        yield test_client


class TestPorts:

    def test_list_ports(self, client, monkeypatch):
        monkeypatch.setattr(
            "artconsole.api.routes.device.scan_ports", lambda: ["/dev/ttyUSB0", "/dev/ttyUSB1"]
        )
        response = client.get("/api/ports")
        assert response.status_code == 200
        assert response.json() == ["/dev/ttyUSB0", "/dev/ttyUSB1"]

    def test_pyserial_missing(self, client, monkeypatch):
        def _unavailable():
            raise TransportUnavailableError("pyserial is not installed")

        monkeypatch.setattr("artconsole.api.routes.device.scan_ports", _unavailable)
        response = client.get("/api/ports")
        assert response.status_code == 503


class TestConnection:

    def test_initial_status(self, client):
        response = client.get("/api/device")
        assert response.json() == {"connected": False, "state": "disconnected", "port": None}

    def test_connect_and_disconnect(self, client, transport):
        response = client.post("/api/device/connect", params={"port": "/dev/ttyUSB0"})
        assert response.status_code == 200
        assert response.json()["connected"] is True
        assert response.json()["port"] == "/dev/ttyUSB0"

        response = client.post("/api/device/disconnect")
        assert response.json()["connected"] is False
        assert transport.close_calls == 1

    def test_connect_auto_selects_port(self, client, transport):
        response = client.post("/api/device/connect")
        assert response.status_code == 200
        assert transport.opened_with.port == "/dev/ttyUSB0"
        client.post("/api/device/disconnect")

    def test_invalid_port_rejected(self, client, transport):
        response = client.post("/api/device/connect", params={"port": "/etc/passwd"})
        assert response.status_code == 400
        assert transport.open_calls == 0

    def test_open_failure(self, client, transport):
        transport.open_error = OpenFailedError("Permission denied")
        response = client.post("/api/device/connect")
        assert response.status_code == 502
        log = client.get("/api/device/log").json()
        assert log[-1]["message"] == "Error opening serial port: Permission denied"
        assert log[-1]["kind"] == "error"

    def test_connect_twice_conflicts(self, client):
        client.post("/api/device/connect")
        response = client.post("/api/device/connect")
        assert response.status_code == 409
        client.post("/api/device/disconnect")

    def test_no_ports(self, monkeypatch):
        c = DeviceConsole(transport=FakeTransport(ports=()))
        monkeypatch.setattr(pool, "_config", SerialConfig())
        monkeypatch.setattr(pool, "_console", c)
        app = create_app(ConsoleSettings(), enable_ui=False)
        with TestClient(app) as test_client:
            response = test_client.post("/api/device/connect")
        assert response.status_code == 503


class TestCommands:

    def test_get_net_requires_connection(self, client):
        response = client.post("/api/device/get-net")
        assert response.status_code == 409
        assert response.json()["detail"] == "Not connected to a board yet."

    def test_get_net(self, client, transport):
        client.post("/api/device/connect")
        response = client.post("/api/device/get-net")
        client.post("/api/device/disconnect")
        assert response.json() == {"sent": True}
        assert transport.writes == [b'{"cmd":"GET_NET"}\n']

    def test_reboot(self, client, transport):
        client.post("/api/device/connect")
        response = client.post("/api/device/reboot")
        client.post("/api/device/disconnect")
        assert response.json() == {"sent": True}
        assert transport.writes == [b'{"cmd":"REBOOT"}\n']

    def test_set_network(self, client, transport):
        client.post("/api/device/connect")
        response = client.post("/api/device/network", json={"ssid": "home", "gw": "10.0.0.1"})
        client.post("/api/device/disconnect")
        assert response.json() == {"sent": True}
        assert transport.writes == [b'{"cmd":"SET_NET","ssid":"home","gw":"10.0.0.1"}\n']

    def test_set_network_empty(self, client, transport):
        client.post("/api/device/connect")
        response = client.post("/api/device/network", json={"ssid": "  "})
        client.post("/api/device/disconnect")
        assert response.status_code == 422
        assert transport.writes == []


class TestStateAndLog:

    def test_state_reflects_reports(self, client, console):
        console.handle_line('{"modeText":"RUN","ssid":"net1"}')
        body = client.get("/api/device/state").json()
        assert body["summary"] == "Mode: RUN | Wi-Fi: net1"
        assert body["state"]["ssid"] == "net1"

    def test_log_since(self, client, console):
        console.handle_line("first")
        console.handle_line("second")
        assert [e["message"] for e in client.get("/api/device/log").json()] == ["<- first", "<- second"]
        assert [e["message"] for e in client.get("/api/device/log", params={"since": 1}).json()] == ["<- second"]
