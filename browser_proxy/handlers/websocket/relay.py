"""Full-duplex frame relay between a client and a backend WebSocket.

relay_frames() owns one relay pairing for its whole lifetime. It runs two
pumps concurrently:

    client -> backend   Starlette WebSocket.receive() to websockets send()
    backend -> client   iteration over the websockets connection

Frames keep their type (text stays text, binary stays binary) and their
order within each direction. The pairing ends as soon as either pump stops
or the backend session's ``closed`` event fires; the other side is then
closed as well, so no half-open pairing survives.
"""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Callable

from fastapi import WebSocket
from starlette.websockets import WebSocketState
from websockets.exceptions import ConnectionClosed
from websockets.asyncio.client import ClientConnection

from ...config.websocket import (
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_RECLAIMED_CODE,
    WS_CLOSE_RECLAIMED_REASON,
    WS_CLOSE_INTERNAL_ERROR_CODE,
)
from ...errors import RelayTransportError, classify_error
from ...telemetry import get_metrics, capture_error
from .disconnects import is_expected_disconnect

logger = logging.getLogger(__name__)

# Reserved codes that must never appear in a close frame (RFC 6455 7.4.1)
_UNSENDABLE_CLOSE_CODES = frozenset({1005, 1006, 1015})

ENDED_BY_CLIENT = "client"
ENDED_BY_BACKEND = "backend"
ENDED_BY_RELEASE = "released"


def _sendable_close_code(code: int | None, fallback: int) -> int:
    if code is None or code in _UNSENDABLE_CLOSE_CODES or code < 1000 or code >= 5000:
        return fallback
    return code


async def _pump_client_to_backend(
    client: WebSocket,
    backend: ClientConnection,
    on_activity: Callable[[], None] | None,
) -> int | None:
    """Forward client frames until the client disconnects; return its close code."""
    while True:
        message = await client.receive()
        if message["type"] == "websocket.disconnect":
            return message.get("code")
        data = message.get("bytes")
        if data is None:
            data = message.get("text")
        if data is None:
            continue
        await backend.send(data)
        if on_activity is not None:
            on_activity()


async def _pump_backend_to_client(
    backend: ClientConnection,
    client: WebSocket,
    on_activity: Callable[[], None] | None,
) -> int | None:
    """Forward backend frames until the backend closes; return its close code."""
    try:
        async for frame in backend:
            if isinstance(frame, bytes):
                await client.send_bytes(frame)
            else:
                await client.send_text(frame)
            if on_activity is not None:
                on_activity()
    except ConnectionClosed as exc:
        # Iteration only ends quietly for 1000/1001; other codes raise.
        return exc.rcvd.code if exc.rcvd is not None else None
    return backend.close_code


async def _close_client(client: WebSocket, code: int, reason: str = "") -> None:
    if client.application_state != WebSocketState.CONNECTED:
        return
    if client.client_state == WebSocketState.DISCONNECTED:
        return
    with contextlib.suppress(Exception):
        await client.close(code=code, reason=reason)


async def _close_backend(backend: ClientConnection, code: int, reason: str = "") -> None:
    with contextlib.suppress(Exception):
        await backend.close(code=code, reason=reason)


async def _cancel_tasks(tasks) -> None:
    for task in tasks:
        if not task.done():
            task.cancel()
    for task in tasks:
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await task


def _close_code_of(task: asyncio.Task) -> int | None:
    if task.cancelled() or task.exception() is not None:
        return None
    return task.result()


def _log_pump_failure(task: asyncio.Task, side: str) -> bool:
    """Log an unexpected pump error; return True if the pump failed."""
    if task.cancelled():
        return False
    exc = task.exception()
    if exc is None or is_expected_disconnect(exc):
        return False
    err = RelayTransportError(f"{side} transport failed: {exc}")
    error_type = classify_error(exc)
    logger.warning("relay %s (%s)", err, error_type, exc_info=exc)
    get_metrics().errors_total.add(1, {"error_type": error_type, "side": side})
    capture_error(err)
    return True


async def relay_frames(
    client: WebSocket,
    backend: ClientConnection,
    *,
    closed: asyncio.Event | None = None,
    on_activity: Callable[[], None] | None = None,
) -> str:
    """Bridge an accepted client WebSocket and an open backend connection.

    Args:
        client: Accepted Starlette WebSocket.
        backend: Open websockets client connection to the backend.
        closed: Event set when the backend session is released.
        on_activity: Called after every relayed frame.

    Returns:
        Which side ended the pairing: "client", "backend" or "released".
    """
    upstream = asyncio.create_task(_pump_client_to_backend(client, backend, on_activity))
    downstream = asyncio.create_task(_pump_backend_to_client(backend, client, on_activity))
    watchers: dict[asyncio.Task, str] = {
        upstream: ENDED_BY_CLIENT,
        downstream: ENDED_BY_BACKEND,
    }
    if closed is not None:
        watchers[asyncio.create_task(closed.wait())] = ENDED_BY_RELEASE

    try:
        done, _ = await asyncio.wait(watchers, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        await _cancel_tasks(watchers)
        await _close_backend(backend, WS_CLOSE_NORMAL_CODE)
        await _close_client(client, WS_CLOSE_NORMAL_CODE)
        raise
    await _cancel_tasks(watchers)

    upstream_failed = upstream in done and _log_pump_failure(upstream, ENDED_BY_CLIENT)
    downstream_failed = downstream in done and _log_pump_failure(downstream, ENDED_BY_BACKEND)

    if downstream in done:
        ended = ENDED_BY_BACKEND
    elif upstream in done:
        ended = ENDED_BY_CLIENT
    else:
        ended = ENDED_BY_RELEASE

    if ended == ENDED_BY_RELEASE:
        await _close_backend(backend, WS_CLOSE_NORMAL_CODE)
        await _close_client(client, WS_CLOSE_RECLAIMED_CODE, WS_CLOSE_RECLAIMED_REASON)
    elif ended == ENDED_BY_BACKEND:
        fallback = WS_CLOSE_INTERNAL_ERROR_CODE if downstream_failed else WS_CLOSE_NORMAL_CODE
        code = None if downstream_failed else _close_code_of(downstream)
        await _close_client(client, _sendable_close_code(code, fallback))
        await _close_backend(backend, WS_CLOSE_NORMAL_CODE)
    else:
        fallback = WS_CLOSE_INTERNAL_ERROR_CODE if upstream_failed else WS_CLOSE_NORMAL_CODE
        code = None if upstream_failed else _close_code_of(upstream)
        await _close_backend(backend, _sendable_close_code(code, fallback))
        await _close_client(client, WS_CLOSE_NORMAL_CODE)

    logger.info("relay closed by %s", ended)
    return ended


__all__ = [
    "ENDED_BY_CLIENT",
    "ENDED_BY_BACKEND",
    "ENDED_BY_RELEASE",
    "relay_frames",
]
