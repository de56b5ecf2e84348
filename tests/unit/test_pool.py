"""Unit tests for the shared console and runtime settings."""

from __future__ import annotations

import asyncio

import pytest

from artconsole.core import pool
from artconsole.core.console import DeviceConsole
from artconsole.settings import DEFAULT_HOST, DEFAULT_HTTP_PORT, ConsoleSettings
from artconsole.transport.base import SerialConfig


@pytest.fixture(autouse=True)
def _fresh_pool(monkeypatch):
    monkeypatch.setattr(pool, "_config", SerialConfig())
    monkeypatch.setattr(pool, "_console", None)


class TestValidatePort:

    @pytest.mark.parametrize("port", ["", None])
    def test_empty_rejected(self, port):
        with pytest.raises(ValueError):
            pool.validate_port(port)

    def test_platform_patterns(self, monkeypatch):
        monkeypatch.setattr("sys.platform", "linux")
        pool.validate_port("/dev/ttyUSB0")
        pool.validate_port("/dev/ttyACM12")
        with pytest.raises(ValueError, match="Invalid serial port path"):
            pool.validate_port("/etc/passwd")

        monkeypatch.setattr("sys.platform", "win32")
        pool.validate_port("COM3")
        with pytest.raises(ValueError):
            pool.validate_port("/dev/ttyUSB0")


class TestSharedConsole:

    def test_single_instance(self, transport, monkeypatch):
        monkeypatch.setattr(pool, "DeviceConsole", lambda config: DeviceConsole(transport, config))
        assert pool.get_console() is pool.get_console()

    def test_select_port_updates_existing_console(self, transport, monkeypatch):
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setattr(pool, "DeviceConsole", lambda config: DeviceConsole(transport, config))
        console = pool.get_console()
        pool.select_port("/dev/ttyACM0")
        assert console.connection.config.port == "/dev/ttyACM0"
        pool.select_port(None)
        assert console.connection.config.port is None

    def test_shutdown_disconnects(self, transport, monkeypatch):
        monkeypatch.setattr(pool, "DeviceConsole", lambda config: DeviceConsole(transport, config))

        async def scenario():
            console = pool.get_console()
            await console.connect()
            await pool.shutdown()
            return console

        console = asyncio.run(scenario())
        assert not console.is_connected
        assert transport.close_calls == 1
        assert pool._console is None


class TestConsoleSettings:

    def test_defaults(self, monkeypatch):
        for name in ("ARTCONSOLE_PORT", "ARTCONSOLE_HOST", "ARTCONSOLE_HTTP_PORT", "ARTCONSOLE_STORAGE_SECRET"):
            monkeypatch.delenv(name, raising=False)
        settings = ConsoleSettings.from_env()
        assert settings.serial_port is None
        assert settings.host == DEFAULT_HOST
        assert settings.http_port == DEFAULT_HTTP_PORT
        assert len(settings.storage_secret) == 64

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ARTCONSOLE_PORT", "COM4")
        monkeypatch.setenv("ARTCONSOLE_HOST", "0.0.0.0")
        monkeypatch.setenv("ARTCONSOLE_HTTP_PORT", "9000")
        monkeypatch.setenv("ARTCONSOLE_STORAGE_SECRET", "s3cret")
        settings = ConsoleSettings.from_env()
        assert settings == ConsoleSettings("COM4", "0.0.0.0", 9000, "s3cret")
        assert "s3cret" not in repr(settings)
