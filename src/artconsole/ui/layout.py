"""Shared page layout with header and content area."""

from __future__ import annotations

from typing import Callable

from nicegui import ui

from artconsole.ui.theme import COLORS, GLOBAL_CSS


def page_layout(title: str, content_fn: Callable) -> None:
    """Create the standard page layout with a header bar.

    Args:
        title: Page title displayed in the header.
        content_fn: Callable that builds the page content.
    """
    ui.add_css(GLOBAL_CSS)
    ui.add_head_html(
        '<link href="https://fonts.googleapis.com/css2?'
        'family=JetBrains+Mono:wght@400;500;700&display=swap" rel="stylesheet">'
    )

    ui.dark_mode(True)
    ui.colors(primary=COLORS.cyan, secondary=COLORS.blue, accent=COLORS.purple)

    with ui.header(elevated=True).classes("q-pa-sm"):
        with ui.row().classes("w-full items-center no-wrap q-gutter-md"):
            ui.icon("lightbulb").style(
                f"color: {COLORS.cyan}; font-size: 1.6rem;"
            )
            ui.label("ARTCONSOLE").classes("text-h6 text-bold").style(
                f"color: {COLORS.cyan}; letter-spacing: 0.15em;"
            )
            ui.label("|").style(f"color: {COLORS.text_muted};")
            ui.label("Art-Net Node Serial Console").classes(
                "text-subtitle2"
            ).style(f"color: {COLORS.text_secondary};")

            ui.space()

            ui.label(title).classes("text-subtitle1").style(
                f"color: {COLORS.text_primary};"
            )

    with ui.column().classes("q-pa-md w-full").style(
        f"background-color: {COLORS.bg_primary};"
    ):
        content_fn()
