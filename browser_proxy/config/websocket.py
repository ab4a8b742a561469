"""WebSocket relay configuration values.

Close Codes (RFC 6455):
    1000: Normal closure
    1008: Policy violation (auth failure when denial responses are unsupported)
    1011: Internal error (backend unavailable)
    4004: Application-defined (unknown channel)
    4000: Application-defined (backend reclaimed while idle)

Relay:
    WS_RELAY_MAX_SIZE: Largest frame accepted from the backend, in bytes.
        0 disables the limit; browser protocol frames can be large.
    WS_BACKEND_CONNECT_TIMEOUT_S: Opening handshake timeout toward the backend.
    WS_FORWARD_HEADER_PREFIXES: Client request headers with these prefixes
        are copied onto the backend connection.
"""

from __future__ import annotations

import os

WS_CLOSE_NORMAL_CODE = int(os.getenv("WS_CLOSE_NORMAL_CODE", "1000"))
WS_CLOSE_UNAUTHORIZED_CODE = int(os.getenv("WS_CLOSE_UNAUTHORIZED_CODE", "1008"))
WS_CLOSE_INTERNAL_ERROR_CODE = int(os.getenv("WS_CLOSE_INTERNAL_ERROR_CODE", "1011"))
WS_CLOSE_NOT_FOUND_CODE = int(os.getenv("WS_CLOSE_NOT_FOUND_CODE", "4004"))
WS_CLOSE_RECLAIMED_CODE = int(os.getenv("WS_CLOSE_RECLAIMED_CODE", "4000"))
WS_CLOSE_RECLAIMED_REASON = os.getenv("WS_CLOSE_RECLAIMED_REASON", "backend_released")

WS_RELAY_MAX_SIZE = int(os.getenv("WS_RELAY_MAX_SIZE", "0"))
WS_BACKEND_CONNECT_TIMEOUT_S = float(os.getenv("WS_BACKEND_CONNECT_TIMEOUT_S", "10"))
WS_FORWARD_HEADER_PREFIXES = tuple(
    prefix.strip().lower()
    for prefix in os.getenv("WS_FORWARD_HEADER_PREFIXES", "x-playwright-").split(",")
    if prefix.strip()
)

WS_TOKEN_QUERY_PARAM = os.getenv("WS_TOKEN_QUERY_PARAM", "token")
WS_TOKEN_HEADER = os.getenv("WS_TOKEN_HEADER", "x-auth-token").lower()

__all__ = [
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_UNAUTHORIZED_CODE",
    "WS_CLOSE_INTERNAL_ERROR_CODE",
    "WS_CLOSE_NOT_FOUND_CODE",
    "WS_CLOSE_RECLAIMED_CODE",
    "WS_CLOSE_RECLAIMED_REASON",
    "WS_RELAY_MAX_SIZE",
    "WS_BACKEND_CONNECT_TIMEOUT_S",
    "WS_FORWARD_HEADER_PREFIXES",
    "WS_TOKEN_QUERY_PARAM",
    "WS_TOKEN_HEADER",
]
