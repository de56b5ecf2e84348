"""Append-only console log shown to the user."""

from __future__ import annotations

from typing import Callable

from artconsole.models.log import LogEntry, LogKind
from artconsole.utils.logging import get_logger

logger = get_logger(__name__)

LogListener = Callable[[LogEntry], None]


class ConsoleLog:
    """User-visible log of console activity.

    Entries are never modified or removed. Listeners are called
    synchronously, in subscription order, for every new entry.
    """

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []
        self._listeners: list[LogListener] = []

    @property
    def entries(self) -> tuple[LogEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def subscribe(self, listener: LogListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: LogListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def append(self, kind: LogKind, text: str) -> LogEntry:
        entry = LogEntry(kind=kind, text=text)
        self._entries.append(entry)
        logger.debug("console_log", kind=kind.value, text=text)
        for listener in list(self._listeners):
            listener(entry)
        return entry

    def info(self, text: str) -> LogEntry:
        return self.append(LogKind.INFO, text)

    def error(self, text: str) -> LogEntry:
        return self.append(LogKind.ERROR, text)

    def inbound_text(self, text: str) -> LogEntry:
        return self.append(LogKind.INBOUND_TEXT, text)

    def inbound_json(self, text: str) -> LogEntry:
        return self.append(LogKind.INBOUND_JSON, text)

    def outbound(self, text: str) -> LogEntry:
        return self.append(LogKind.OUTBOUND, text)

    def of_kind(self, kind: LogKind) -> list[LogEntry]:
        return [e for e in self._entries if e.kind is kind]
