"""FastAPI application factory and configuration."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from artconsole import __version__
from artconsole.core import pool
from artconsole.settings import ConsoleSettings
from artconsole.transport.base import SerialConfig
from artconsole.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown."""
    logger.info("artconsole_api_starting")
    yield
    await pool.shutdown()
    logger.info("artconsole_api_stopped")


def create_app(
    settings: ConsoleSettings | None = None,
    enable_ui: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Process settings; read from the environment if omitted.
        enable_ui: Whether to mount the NiceGUI web console.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or ConsoleSettings.from_env()
    pool.configure(SerialConfig(port=settings.serial_port))

    app = FastAPI(
        title="artconsole API",
        description="Serial configuration console for Art-Net DMX nodes",
        version=__version__,
        lifespan=lifespan,
    )

    from artconsole.api.routes import device
    app.include_router(device.router)

    if enable_ui:
        from artconsole.ui.main import setup_ui
        setup_ui(app, settings)

    return app
