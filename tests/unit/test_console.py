"""Unit tests for the device console session."""

from __future__ import annotations

import asyncio

import pytest

from artconsole.core.console import REBOOT_PROMPT, SET_NET_PROMPT, DeviceConsole
from artconsole.exceptions import (
    EmptyCommandError,
    NotConnectedError,
    OpenFailedError,
)
from artconsole.models.commands import NetworkSettings
from artconsole.models.log import LogKind
from fakes import ScriptedGate, settle


@pytest.fixture
def console(transport, sink) -> DeviceConsole:
    c = DeviceConsole(transport=transport)
    c.sink.attach(sink)
    return c


class TestHandleLine:
    """Test classification and dispatch of inbound lines."""

    def test_text_line_logged_once(self, console, sink):
        console.handle_line("Booting Art-Net node\r")
        assert [e.message for e in console.log.entries] == ["<- Booting Art-Net node"]
        assert [e.message for e in sink.log] == ["<- Booting Art-Net node"]
        assert sink.summaries == []

    def test_empty_line_ignored(self, console):
        console.handle_line("   \r")
        assert len(console.log) == 0

    def test_bad_json_logs_one_error(self, console, sink):
        console.handle_line("{bad json")
        entries = console.log.entries
        assert len(entries) == 1
        assert entries[0].kind is LogKind.ERROR
        assert entries[0].text.startswith("JSON parse error: ")
        assert entries[0].text.endswith("(line: {bad json)")
        assert console.state.present_fields == set()
        assert sink.summaries == []

    def test_report_updates_state_summary_and_form(self, console, sink):
        console.handle_line('{"modeText":"RUN","ssid":"net1"}')
        assert console.log.entries[0].message == 'JSON <= {"modeText":"RUN","ssid":"net1"}'
        assert console.summary == "Mode: RUN | Wi-Fi: net1"
        assert sink.summaries == ["Mode: RUN | Wi-Fi: net1"]
        assert sink.fields == {"ssid": "net1"}
        assert console.form == {"ssid": "net1"}

    def test_partial_report_keeps_other_fields(self, console, sink):
        console.handle_line('{"ip":"10.0.0.2","gw":"10.0.0.1","sn":"255.255.255.0","ssid":"a"}')
        console.handle_line('{"ssid":"home","ip":"10.0.0.5"}')
        assert console.state.gateway == "10.0.0.1"
        assert console.state.subnet_mask == "255.255.255.0"
        assert console.state.ip == "10.0.0.5"
        assert sink.fields == {"ssid": "home", "ip": "10.0.0.5", "gw": "10.0.0.1", "sn": "255.255.255.0"}
        # summary reflects the latest report only
        assert sink.summaries[-1] == "Wi-Fi: home"

    def test_report_without_known_fields(self, console, sink):
        console.handle_line('{"rssi":-61}')
        assert sink.summaries == [""]
        assert sink.fields == {}

    def test_password_never_reaches_form(self, console, sink):
        console.handle_line('{"ssid":"home","pwd":"secret"}')
        assert "pwd" not in sink.fields


class TestConnection:

    def test_connect_and_disconnect(self, console, transport, sink):
        async def scenario():
            assert await console.connect() is True
            assert console.is_connected
            transport.feed(b'{"ssid":"home"}\n')
            await settle()
            await console.disconnect()

        asyncio.run(scenario())
        assert not console.is_connected
        assert sink.connected == [True, False]
        assert console.state.ssid == "home"
        assert console.log.entries[-1].text == "Serial port closed."

    def test_open_failure_returns_false(self, console, transport):
        transport.open_error = OpenFailedError("busy")
        assert asyncio.run(console.connect()) is False
        assert console.log.entries[-1].text == "Error opening serial port: busy"


class TestCommands:

    def _connected(self, console, body):
        async def scenario():
            await console.connect()
            try:
                return await body()
            finally:
                await console.disconnect()
        return asyncio.run(scenario())

    def test_request_status(self, console, transport):
        self._connected(console, console.request_status)
        assert transport.writes == [b'{"cmd":"GET_NET"}\n']

    def test_request_status_not_connected(self, console, transport):
        with pytest.raises(NotConnectedError, match="Not connected"):
            asyncio.run(console.request_status())
        assert transport.writes == []

    def test_reboot_confirmed(self, console, transport, gate):
        sent = self._connected(console, lambda: console.reboot(gate))
        assert sent is True
        assert gate.prompts == [REBOOT_PROMPT]
        assert transport.writes == [b'{"cmd":"REBOOT"}\n']

    def test_reboot_declined(self, console, transport):
        gate = ScriptedGate(answer=False)
        sent = self._connected(console, lambda: console.reboot(gate))
        assert sent is False
        assert transport.writes == []
        assert console.log.of_kind(LogKind.OUTBOUND) == []

    def test_reboot_not_connected_skips_prompt(self, console, gate):
        with pytest.raises(NotConnectedError):
            asyncio.run(console.reboot(gate))
        assert gate.prompts == []

    def test_save_network(self, console, transport, gate):
        settings = NetworkSettings(ssid="home", ip="10.0.0.9")
        sent = self._connected(console, lambda: console.save_network(settings, gate))
        assert sent is True
        assert gate.prompts == [SET_NET_PROMPT]
        assert transport.writes == [b'{"cmd":"SET_NET","ssid":"home","ip":"10.0.0.9"}\n']

    def test_save_network_empty_form(self, console, transport, gate):
        with pytest.raises(EmptyCommandError):
            self._connected(console, lambda: console.save_network(NetworkSettings(), gate))
        assert gate.prompts == []
        assert transport.writes == []

    def test_save_network_not_connected(self, console, gate):
        with pytest.raises(NotConnectedError):
            asyncio.run(console.save_network(NetworkSettings(ssid="home"), gate))
        assert gate.prompts == []

    def test_deeply_nested_line_is_skipped(self, console, transport):
        async def scenario():
            await console.connect()
            transport.feed(b'{"a":' + b"[" * 100_000 + b"\n")
            transport.feed(b"after\n")
            await settle()
            connected = console.is_connected
            await console.disconnect()
            return connected

        assert asyncio.run(scenario()) is True
        messages = [e.message for e in console.log.entries]
        assert messages[1].startswith("JSON parse error: ")
        assert messages[2] == "<- after"
        assert console.state.present_fields == set()

    def test_nan_report_is_rejected(self, console, sink):
        console.handle_line('{"sSub":NaN,"sUni":1,"sChan":2}')
        assert console.log.entries[0].kind is LogKind.ERROR
        assert console.state.artnet_subnet is None
        assert sink.summaries == []
