"""NiceGUI web console setup and page registration."""

from __future__ import annotations

from fastapi import FastAPI
from nicegui import ui

from artconsole.settings import ConsoleSettings


def setup_ui(fastapi_app: FastAPI, settings: ConsoleSettings) -> None:
    """Register NiceGUI pages with the FastAPI application."""

    @ui.page("/")
    def index():
        from artconsole.ui.pages.console import console_page
        console_page()

    ui.run_with(
        fastapi_app,
        title="artconsole - Art-Net Node Console",
        storage_secret=settings.storage_secret,
    )
