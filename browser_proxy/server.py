"""FastAPI front door for the browser proxy.

This module builds the ASGI application that fronts the backend pool:

- GET /health returns {"status": "ok", "activeSessions": n} (no auth)
- WebSocket /{channel}/playwright runs the relay state machine
- Any other WebSocket path is refused with 404; other HTTP paths and
  methods 404 too

Server Lifecycle:
    1. On startup: initialize telemetry, create the session table (owned
       state) and start the idle reclaimer
    2. Relay upgrades lazily launch one backend per channel type
    3. On shutdown: stop the reclaimer, terminate every backend, then flush
       telemetry

Example:
    Run directly with uvicorn:
        $ uvicorn browser_proxy.server:create_app --factory --port 3000

    Or through the package entry point:
        $ python -m browser_proxy
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, WebSocket
from starlette.exceptions import HTTPException
from fastapi.responses import ORJSONResponse

from .config import (
    PORT,
    HEALTH_PATH,
    PUBLIC_HOST,
    RELAY_PATH_SEGMENT,
)
from .config.secrets import AUTH_TOKEN
from .state import ChannelType
from .backends import BackendLauncher, IdleReclaimer, SessionTable, SubprocessLauncher
from .helpers.urls import connect_url
from .telemetry import init_telemetry, shutdown_telemetry
from .helpers.validation import validate_env
from .handlers.websocket import NOT_FOUND, handle_relay_connection, reject_upgrade

logger = logging.getLogger(__name__)


async def _not_found(request: Request, exc: HTTPException) -> ORJSONResponse:
    """Answer unsupported methods on known paths as if the path did not exist."""
    return ORJSONResponse({"detail": "Not Found"}, status_code=404)


def _log_connect_hints(auth_token: str) -> None:
    logger.info("Playwright browser server listening on port %s", PORT)
    logger.info("Connect using:")
    for channel in ChannelType:
        url = connect_url(PUBLIC_HOST, PORT, channel.value, RELAY_PATH_SEGMENT, auth_token)
        logger.info('  - %s: playwright.%s.connect("%s")', channel.value.capitalize(), channel.value, url)


def create_app(
    *,
    launcher: BackendLauncher | None = None,
    auth_token: str | None = None,
    idle_timeout_s: float | None = None,
    sweep_interval_s: float | None = None,
) -> FastAPI:
    """Build the proxy application.

    Args:
        launcher: Backend launcher (defaults to SubprocessLauncher).
        auth_token: Shared secret (defaults to REMOTE_BROWSER_SERVER_AUTH_TOKEN).
        idle_timeout_s: Idle threshold for reclaiming backends.
        sweep_interval_s: Seconds between idle sweeps.

    Raises:
        ValueError: The configuration is invalid.
    """
    token = AUTH_TOKEN if auth_token is None else auth_token
    overrides: dict[str, object] = {"auth_token": token}
    if idle_timeout_s is not None:
        overrides["idle_timeout_s"] = idle_timeout_s
    if sweep_interval_s is not None:
        overrides["sweep_interval_s"] = sweep_interval_s
    validate_env(**overrides)

    backend_launcher = launcher if launcher is not None else SubprocessLauncher()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_telemetry()
        table = SessionTable(backend_launcher)
        reclaimer = IdleReclaimer(table, idle_timeout_s=idle_timeout_s, tick_s=sweep_interval_s)
        app.state.table = table
        app.state.reclaimer = reclaimer
        reclaimer.start()
        _log_connect_hints(token)
        try:
            yield
        finally:
            logger.info("Shutting down server")
            await reclaimer.stop()
            await table.teardown()
            shutdown_telemetry()
            logger.info("Server shut down")

    app = FastAPI(
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
        exception_handlers={405: _not_found},
    )

    @app.get(HEALTH_PATH)
    async def health():
        """Liveness probe (no authentication required)."""
        return {"status": "ok", "activeSessions": app.state.table.active_count()}

    @app.websocket(f"/{{channel}}/{RELAY_PATH_SEGMENT}")
    async def relay_endpoint(websocket: WebSocket, channel: str):
        """Relay upgrade for one channel type."""
        await handle_relay_connection(websocket, channel, table=app.state.table, auth_token=token)

    @app.websocket("/{path:path}")
    async def unmatched_websocket(websocket: WebSocket, path: str):
        """Refuse upgrades on any other path."""
        logger.warning("unhandled WebSocket upgrade path=/%s", path)
        await reject_upgrade(websocket, NOT_FOUND)

    return app


__all__ = ["create_app"]
