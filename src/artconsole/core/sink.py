"""Collaborator interfaces: presentation sink and confirmation gate."""

from __future__ import annotations

from typing import Protocol

from artconsole.models.log import LogEntry
from artconsole.utils.logging import get_logger

logger = get_logger(__name__)


class PresentationSink(Protocol):
    """Receives everything the console wants to show."""

    def append_log(self, entry: LogEntry) -> None: ...

    def set_connected(self, connected: bool) -> None: ...

    def set_state_summary(self, text: str) -> None: ...

    def set_form_field(self, name: str, value: str) -> None: ...


class ConfirmationGate(Protocol):
    """Asks the user before an irreversible command is sent."""

    async def confirm(self, prompt: str) -> bool: ...


class AutoConfirm:
    """Gate that always answers yes (API calls, ``--yes`` on the CLI)."""

    async def confirm(self, prompt: str) -> bool:
        logger.debug("auto_confirmed", prompt=prompt)
        return True


class BroadcastSink:
    """Fans presentation updates out to every attached sink.

    One console serves all open browser tabs; each tab attaches its own
    sink and detaches it when the client goes away.
    """

    def __init__(self) -> None:
        self._sinks: list[PresentationSink] = []

    def __len__(self) -> int:
        return len(self._sinks)

    def attach(self, sink: PresentationSink) -> None:
        self._sinks.append(sink)

    def detach(self, sink: PresentationSink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def append_log(self, entry: LogEntry) -> None:
        self._each("append_log", entry)

    def set_connected(self, connected: bool) -> None:
        self._each("set_connected", connected)

    def set_state_summary(self, text: str) -> None:
        self._each("set_state_summary", text)

    def set_form_field(self, name: str, value: str) -> None:
        self._each("set_form_field", name, value)

    def _each(self, method: str, *args: object) -> None:
        """Call one sink method on every attached sink.

        A failing sink (e.g. a browser tab torn down mid-update) is logged
        and skipped.
        """
        for sink in list(self._sinks):
            try:
                getattr(sink, method)(*args)
            except Exception as exc:
                logger.warning("sink_update_error", method=method, error=str(exc))
