"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import os
import secrets
from dataclasses import dataclass, field

ENV_PORT = "ARTCONSOLE_PORT"
ENV_HOST = "ARTCONSOLE_HOST"
ENV_HTTP_PORT = "ARTCONSOLE_HTTP_PORT"
ENV_STORAGE_SECRET = "ARTCONSOLE_STORAGE_SECRET"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_HTTP_PORT = 8080

# Browser-based firmware flasher for ESP32 boards
FLASHER_URL = "https://espressif.github.io/esptool-js/"


@dataclass(frozen=True)
class ConsoleSettings:
    """Settings for the web console process."""

    serial_port: str | None = None
    host: str = DEFAULT_HOST
    http_port: int = DEFAULT_HTTP_PORT
    storage_secret: str = field(default_factory=lambda: secrets.token_hex(32), repr=False)

    @classmethod
    def from_env(cls) -> ConsoleSettings:
        """Build settings from ``ARTCONSOLE_*`` variables.

        Raises:
            ValueError: If ``ARTCONSOLE_HTTP_PORT`` is not an integer.
        """
        http_port = os.environ.get(ENV_HTTP_PORT)
        kwargs: dict = {
            "serial_port": os.environ.get(ENV_PORT) or None,
            "host": os.environ.get(ENV_HOST) or DEFAULT_HOST,
            "http_port": int(http_port) if http_port else DEFAULT_HTTP_PORT,
        }
        secret = os.environ.get(ENV_STORAGE_SECRET)
        if secret:
            kwargs["storage_secret"] = secret
        return cls(**kwargs)
