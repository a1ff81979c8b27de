"""aiohttp application setup and server lifecycle."""

import asyncio
import contextlib
import signal
from typing import Optional

from aiohttp import web

from calendarhub.config.settings import CalendarHubSettings
from calendarhub.sources.defaults import sample_events
from calendarhub.state.controller import CalendarController
from calendarhub.utils.logging import get_logger

from .middleware import correlation_id_middleware
from .routes import register_api_routes

logger = get_logger(__name__)

CONTROLLER_KEY = web.AppKey("controller", CalendarController)
SETTINGS_KEY = web.AppKey("settings", CalendarHubSettings)


def build_controller(settings: CalendarHubSettings) -> CalendarController:
    """Create the state controller for the configured sources."""
    events = []
    if settings.load_sample_events and settings.sources:
        events = sample_events(tuple(settings.sources))
        logger.debug("Loaded %d sample events", len(events))
    return CalendarController(settings.sources, events)


def create_app(
    settings: CalendarHubSettings, controller: Optional[CalendarController] = None
) -> web.Application:
    """Build the web application with routes and middleware registered."""
    if controller is None:
        controller = build_controller(settings)

    app = web.Application(
        middlewares=[correlation_id_middleware],
        client_max_size=settings.server.max_upload_size_bytes,
    )
    app[CONTROLLER_KEY] = controller
    app[SETTINGS_KEY] = settings

    register_api_routes(app, controller, settings.default_source_id)
    logger.debug("Web application created with %d sources", len(controller.sources))
    return app


async def serve(settings: CalendarHubSettings, stop_event: Optional[asyncio.Event] = None) -> None:
    """Run the API server until SIGINT/SIGTERM or ``stop_event`` is set."""
    app = create_app(settings)
    runner = web.AppRunner(app)
    await runner.setup()

    host = settings.server.host
    port = settings.server.port
    site = web.TCPSite(runner, host=host, port=port)
    try:
        await site.start()
    except OSError:
        logger.exception("Failed to start server on %s:%d", host, port)
        await runner.cleanup()
        raise
    logger.info("Server started on http://%s:%d", host, port)

    stop_event = stop_event or asyncio.Event()
    loop = asyncio.get_running_loop()

    def _on_signal() -> None:
        logger.info("Shutdown signal received")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, _on_signal)

    try:
        await stop_event.wait()
    finally:
        await runner.cleanup()
        logger.info("Server shutdown complete")
