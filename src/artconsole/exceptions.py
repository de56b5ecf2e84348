"""Exception hierarchy for the serial console."""

from __future__ import annotations


class ArtConsoleError(Exception):
    """Base exception for all artconsole errors."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class TransportError(ArtConsoleError):
    """Error in the serial transport layer."""


class TransportUnavailableError(TransportError):
    """The host has no usable serial capability (library or port missing)."""


class OpenFailedError(TransportError):
    """The serial port could not be opened."""


class ReadError(TransportError):
    """Reading from an open serial port failed."""


class WriteError(TransportError):
    """Writing to an open serial port failed."""


class NotConnectedError(ArtConsoleError):
    """A command was sent without an active connection."""

    def __init__(self, message: str = "Not connected to a board yet.") -> None:
        super().__init__(message)


class AlreadyConnectedError(ArtConsoleError):
    """connect() was called while a connection is still active."""


class EmptyCommandError(ArtConsoleError):
    """An outbound command carries no parameters and must not be sent."""

    def __init__(
        self, message: str = "No changes to send. Edit at least one field."
    ) -> None:
        super().__init__(message)
