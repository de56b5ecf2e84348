"""Console log entry model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum


class LogKind(StrEnum):
    """Category of a console log entry."""
    INFO = "info"
    ERROR = "error"
    INBOUND_TEXT = "inbound_text"
    INBOUND_JSON = "inbound_json"
    OUTBOUND = "outbound"


_PREFIXES: dict[LogKind, str] = {
    LogKind.INBOUND_TEXT: "<- ",
    LogKind.INBOUND_JSON: "JSON <= ",
    LogKind.OUTBOUND: "=> ",
}


@dataclass(frozen=True)
class LogEntry:
    """One immutable, timestamped line of the console log."""

    kind: LogKind
    text: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def message(self) -> str:
        """Text with its direction marker, e.g. ``"<- boot ok"``."""
        return _PREFIXES.get(self.kind, "") + self.text

    def render(self) -> str:
        """Render as ``[HH:MM:SS.mmm] message`` in UTC."""
        clock = self.timestamp.strftime("%H:%M:%S.") + f"{self.timestamp.microsecond // 1000:03d}"
        return f"[{clock}] {self.message}"
