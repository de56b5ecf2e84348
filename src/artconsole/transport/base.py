"""Abstract byte-stream transport for device communication."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum


class Parity(StrEnum):
    """Serial parity settings, valued as pyserial's parity constants."""
    NONE = "N"
    EVEN = "E"
    ODD = "O"


@dataclass(frozen=True)
class SerialConfig:
    """Serial line configuration.

    The device firmware only speaks 115200 8N1, so the defaults are the
    only values the console ever opens with.
    """
    port: str | None = None
    baud_rate: int = 115200
    data_bits: int = 8
    parity: Parity = Parity.NONE
    stop_bits: int = 1


@dataclass(frozen=True)
class ReadResult:
    """One chunk from the read side of a transport."""
    data: bytes = b""
    end_of_stream: bool = False


class Transport(ABC):
    """Abstract base for byte-stream transports.

    All I/O methods are coroutines. Implementations raise
    ``OpenFailedError``, ``ReadError`` and ``WriteError`` from the
    corresponding calls.
    """

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Whether the underlying handle is currently open."""

    @abstractmethod
    async def request_port(self, config: SerialConfig) -> SerialConfig:
        """Select the port to open and return the completed config.

        Raises:
            TransportUnavailableError: If the host has no serial capability.
        """

    @abstractmethod
    async def open(self, config: SerialConfig) -> None:
        """Open the handle with the given line settings."""

    @abstractmethod
    async def read(self) -> ReadResult:
        """Wait for the next chunk of bytes."""

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """Write all of ``data`` to the device."""

    @abstractmethod
    async def cancel_read(self) -> None:
        """Unblock a pending ``read()`` so it returns end-of-stream."""

    @abstractmethod
    async def close(self) -> None:
        """Close the handle. Safe to call on a closed transport."""
