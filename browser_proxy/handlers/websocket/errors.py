"""Pre-upgrade rejection helpers.

Rejections happen before the client's upgrade is accepted, so the caller
receives a plain HTTP status instead of a WebSocket frame:

    AuthenticationFailedError  -> 401 Unauthorized
    UnknownChannelTypeError    -> 404 Not Found
    BackendLaunchFailedError   -> 500 Internal Server Error
    RelayTransportError        -> 500 Internal Server Error (backend unreachable)

Servers without the ASGI WebSocket denial-response extension cannot send
a status; the handshake is closed with a matching close code instead.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import WebSocket
from fastapi.responses import PlainTextResponse

from ...config.websocket import (
    WS_CLOSE_NOT_FOUND_CODE,
    WS_CLOSE_UNAUTHORIZED_CODE,
    WS_CLOSE_INTERNAL_ERROR_CODE,
)
from ...errors import (
    RelayTransportError,
    UnknownChannelTypeError,
    AuthenticationFailedError,
    BackendLaunchFailedError,
)

DENIAL_RESPONSE_EXTENSION = "websocket.http.response"


@dataclass(frozen=True)
class Rejection:
    """HTTP status and fallback close code for a rejected upgrade."""

    status_code: int
    close_code: int
    message: str


UNAUTHORIZED = Rejection(401, WS_CLOSE_UNAUTHORIZED_CODE, "Unauthorized")
NOT_FOUND = Rejection(404, WS_CLOSE_NOT_FOUND_CODE, "Not Found")
SERVER_ERROR = Rejection(500, WS_CLOSE_INTERNAL_ERROR_CODE, "Internal Server Error")

_REJECTIONS: tuple[tuple[type[BaseException], Rejection], ...] = (
    (AuthenticationFailedError, UNAUTHORIZED),
    (UnknownChannelTypeError, NOT_FOUND),
    (BackendLaunchFailedError, SERVER_ERROR),
    (RelayTransportError, SERVER_ERROR),
)


def rejection_for(exc: BaseException) -> Rejection:
    """Map an exception raised before the upgrade onto a rejection."""
    for cls, rejection in _REJECTIONS:
        if isinstance(exc, cls):
            return rejection
    return SERVER_ERROR


def supports_denial_response(ws: WebSocket) -> bool:
    return DENIAL_RESPONSE_EXTENSION in (ws.scope.get("extensions") or {})


async def reject_upgrade(ws: WebSocket, rejection: Rejection) -> None:
    """Refuse the upgrade with an HTTP status (or a close code as fallback).

    Args:
        ws: The WebSocket connection that has not been accepted yet.
        rejection: Status and close code to report.
    """
    if supports_denial_response(ws):
        await ws.send_denial_response(PlainTextResponse(rejection.message, status_code=rejection.status_code))
        return
    await ws.close(code=rejection.close_code, reason=rejection.message)


__all__ = [
    "Rejection",
    "UNAUTHORIZED",
    "NOT_FOUND",
    "SERVER_ERROR",
    "rejection_for",
    "reject_upgrade",
    "supports_denial_response",
]
