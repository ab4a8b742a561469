"""Relay connection handler orchestration.

This module contains the per-connection state machine behind every relay
upgrade request:

1. Pending:
   - Resolve the channel type named in the path (unknown -> 404)

2. Authorizing:
   - Check the shared token (missing or wrong -> 401)

3. Acquiring:
   - Ask the session table for the channel's backend, launching one if
     none is live (launch failure -> 500)

4. Bridging:
   - Open an outbound WebSocket to the backend address, forwarding the
     client's extra query parameters, ``x-playwright-*`` headers and
     requested subprotocols (unreachable backend -> 500)
   - A client that leaves while the backend starts or the connect is
     pending cancels the connect; nothing is accepted
   - Accept the client upgrade with the negotiated subprotocol
   - Touch the session and pump frames in both directions

5. Closing:
   - Either side closing, erroring, or the session being released closes
     the other side

All failures are local to the connection; the process keeps serving.
"""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib

from fastapi import WebSocket
from starlette.websockets import WebSocketState
from websockets.asyncio.client import ClientConnection, connect

from ...backends import SessionTable
from ...config.websocket import (
    WS_RELAY_MAX_SIZE,
    WS_TOKEN_QUERY_PARAM,
    WS_FORWARD_HEADER_PREFIXES,
    WS_BACKEND_CONNECT_TIMEOUT_S,
)
from ...errors import (
    RelayTransportError,
    UnknownChannelTypeError,
    AuthenticationFailedError,
    BackendLaunchFailedError,
    classify_error,
)
from ...helpers.urls import merge_query
from ...logging import log_context
from ...state import BackendSession, parse_channel_type
from ...telemetry import get_metrics, capture_error
from .auth import ensure_authenticated
from .disconnects import is_expected_disconnect
from .errors import SERVER_ERROR, reject_upgrade, rejection_for
from .relay import relay_frames

logger = logging.getLogger(__name__)

_REJECTED_ERRORS = (
    UnknownChannelTypeError,
    AuthenticationFailedError,
    BackendLaunchFailedError,
    RelayTransportError,
)


def _describe_client(ws: WebSocket) -> str:
    client = ws.client
    if client is None:
        return "-"
    return f"{client.host}:{client.port}"


def _forwarded_query(ws: WebSocket) -> list[tuple[str, str]]:
    """Client query parameters minus the auth token."""
    return [(key, value) for key, value in ws.query_params.multi_items() if key != WS_TOKEN_QUERY_PARAM]


def _forwarded_headers(ws: WebSocket) -> list[tuple[str, str]]:
    """Client request headers the backend needs (``x-playwright-*`` by default)."""
    return [
        (name, value)
        for name, value in ws.headers.items()
        if any(name.lower().startswith(prefix) for prefix in WS_FORWARD_HEADER_PREFIXES)
    ]


def _requested_subprotocols(ws: WebSocket) -> list[str]:
    return list(ws.scope.get("subprotocols") or [])


async def open_backend_connection(ws: WebSocket, session: BackendSession) -> ClientConnection:
    """Open the outbound leg of a relay pairing.

    Raises:
        RelayTransportError: The backend refused or did not answer in time.
    """
    target = merge_query(session.address, _forwarded_query(ws))
    subprotocols = _requested_subprotocols(ws)
    logger.debug("connecting to backend %s", target)
    try:
        return await connect(
            target,
            additional_headers=_forwarded_headers(ws),
            subprotocols=subprotocols or None,
            max_size=WS_RELAY_MAX_SIZE or None,
            open_timeout=WS_BACKEND_CONNECT_TIMEOUT_S,
            ping_interval=None,
        )
    except asyncio.CancelledError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise RelayTransportError(f"could not connect to backend at {session.address}: {exc}") from exc


async def _wait_for_departure(ws: WebSocket) -> None:
    """Return once the client drops the not yet accepted connection."""
    if ws.client_state == WebSocketState.CONNECTING:
        await ws.receive()
    while (await ws.receive())["type"] != "websocket.disconnect":
        continue


async def _stop_watching(departure: asyncio.Task) -> None:
    if not departure.done():
        departure.cancel()
    await asyncio.wait({departure})
    if not departure.cancelled() and departure.exception() is not None:
        logger.debug("client watcher failed: %s", departure.exception())


async def _open_unless_departed(
    ws: WebSocket,
    session: BackendSession,
    departure: asyncio.Task,
) -> ClientConnection | None:
    """Open the backend leg, giving up if the client leaves first.

    Returns None when the client went away; any connection that opened in
    the meantime is closed.

    Raises:
        RelayTransportError: The backend refused or did not answer in time.
    """
    if departure.done():
        return None
    connecting = asyncio.create_task(open_backend_connection(ws, session))
    try:
        await asyncio.wait({connecting, departure}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        connecting.cancel()
        raise
    if not departure.done():
        return connecting.result()

    connecting.cancel()
    await asyncio.wait({connecting})
    if not connecting.cancelled() and connecting.exception() is None:
        with contextlib.suppress(Exception):
            await connecting.result().close()
    return None


async def _reject(ws: WebSocket, exc: BaseException) -> None:
    rejection = rejection_for(exc)
    reason = classify_error(exc)
    logger.warning("rejecting upgrade status=%s reason=%s: %s", rejection.status_code, reason, exc)
    get_metrics().upgrades_rejected_total.add(1, {"status": str(rejection.status_code), "reason": reason})
    if isinstance(exc, RelayTransportError):
        capture_error(exc)
    with contextlib.suppress(Exception):
        await reject_upgrade(ws, rejection)


async def _bridge(ws: WebSocket, table: SessionTable, session: BackendSession, backend: ClientConnection) -> None:
    try:
        await ws.accept(subprotocol=backend.subprotocol)
    except Exception:
        with contextlib.suppress(Exception):
            await backend.close()
        raise

    table.touch(session.channel)
    logger.info("bridged client to %s backend at %s", session.channel.value, session.address)
    metrics = get_metrics()
    attrs = {"channel": session.channel.value}
    metrics.active_relays.add(1, attrs)
    start = time.perf_counter()
    try:
        ended = await relay_frames(ws, backend, closed=session.closed, on_activity=session.touch)
    finally:
        metrics.active_relays.add(-1, attrs)
    metrics.relay_duration.record(time.perf_counter() - start, {**attrs, "ended_by": ended})


async def handle_relay_connection(
    ws: WebSocket,
    channel_name: str,
    *,
    table: SessionTable,
    auth_token: str | None = None,
) -> None:
    """Drive one relay upgrade request from parsing to closure.

    Args:
        ws: The incoming, not yet accepted, WebSocket.
        channel_name: Channel type segment taken from the request path.
        table: Session table owning the backends.
        auth_token: Shared secret (defaults to the configured token).
    """
    with log_context(channel=channel_name, client=_describe_client(ws)):
        try:
            channel = parse_channel_type(channel_name)
            ensure_authenticated(ws, auth_token)
        except _REJECTED_ERRORS as exc:
            await _reject(ws, exc)
            return

        rejected: BaseException | None = None
        departure = asyncio.create_task(_wait_for_departure(ws))
        try:
            session = await table.acquire_session(channel)
            backend = await _open_unless_departed(ws, session, departure)
        except _REJECTED_ERRORS as exc:
            rejected = exc
        finally:
            await _stop_watching(departure)

        if rejected is not None:
            await _reject(ws, rejected)
            return
        if backend is None:
            logger.info("client went away before the backend connection opened")
            return

        with log_context(session_id=session.session_id):
            try:
                await _bridge(ws, table, session, backend)
            except Exception as exc:  # noqa: BLE001
                if is_expected_disconnect(exc):
                    logger.info("client went away before the relay was established")
                else:
                    logger.exception("relay failed")
                    get_metrics().errors_total.add(1, {"error_type": classify_error(exc)})
                    capture_error(exc)
                with contextlib.suppress(Exception):
                    await backend.close()
                if ws.application_state == WebSocketState.CONNECTING:
                    with contextlib.suppress(Exception):
                        await reject_upgrade(ws, SERVER_ERROR)


__all__ = ["handle_relay_connection", "open_backend_connection"]
