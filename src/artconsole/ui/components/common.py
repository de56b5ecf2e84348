"""Common UI components shared by console pages."""

from __future__ import annotations

from nicegui import ui

from artconsole.ui.theme import COLORS


def page_header(title: str, subtitle: str) -> None:
    """Render a standard page header."""
    ui.label(title).classes("text-h5 mb-1").style(
        f"color: {COLORS.text_primary}"
    )
    ui.label(subtitle).classes("text-caption mb-4").style(
        f"color: {COLORS.text_secondary}"
    )


def card_style() -> str:
    """Return the standard card style string."""
    return (
        f"background: {COLORS.bg_card}; "
        f"border: 1px solid {COLORS.border}"
    )


def card_header(title: str, icon: str) -> None:
    """Render a card section header with icon."""
    with ui.row().classes("items-center gap-2 mb-3"):
        ui.icon(icon).classes("text-lg").style(
            f"color: {COLORS.cyan}"
        )
        ui.label(title).classes("text-subtitle2").style(
            f"color: {COLORS.text_primary}"
        )


def connection_badge() -> ui.label:
    """Create the connected/disconnected indicator."""
    badge = ui.label("Disconnected").classes("px-2 py-1 rounded text-xs font-bold")
    set_connection_badge(badge, False)
    return badge


def set_connection_badge(badge: ui.label, connected: bool) -> None:
    """Update the indicator to reflect the connection state."""
    color = COLORS.green if connected else COLORS.red
    badge.text = "Connected" if connected else "Disconnected"
    badge.style(f"background: {color}20; color: {color}; border: 1px solid {color}40")


class ConfirmDialog:
    """Yes/no dialog usable as a ``ConfirmationGate``."""

    def __init__(self, title: str = "Please confirm") -> None:
        self._title = title

    async def confirm(self, prompt: str) -> bool:
        with ui.dialog() as dialog, ui.card().style(card_style()):
            ui.label(self._title).classes("text-h6").style(
                f"color: {COLORS.text_primary}"
            )
            ui.label(prompt).style(f"color: {COLORS.text_secondary}")
            with ui.row().classes("gap-4 mt-2"):
                ui.button("Cancel", on_click=lambda: dialog.submit(False)).props("flat")
                ui.button("Send", on_click=lambda: dialog.submit(True)).props(
                    "flat color=warning"
                )
        result = await dialog
        dialog.delete()
        return bool(result)
