"""Shared-secret token authentication for relay upgrades."""

from __future__ import annotations

import hmac
import logging

from fastapi import WebSocket

from ...config.secrets import AUTH_TOKEN
from ...config.websocket import WS_TOKEN_HEADER, WS_TOKEN_QUERY_PARAM
from ...errors import AuthenticationFailedError

logger = logging.getLogger(__name__)


def validate_token(provided_token: str | None, expected: str | None = None) -> bool:
    """Compare the provided token byte-for-byte against the configured secret.

    Args:
        provided_token: The token presented by the caller.
        expected: Secret to compare against (defaults to AUTH_TOKEN).

    Returns:
        True if valid, False otherwise
    """
    secret = AUTH_TOKEN if expected is None else expected
    if not provided_token or not secret:
        return False
    return hmac.compare_digest(provided_token.encode("utf-8"), secret.encode("utf-8"))


def _select_token(*candidates: str | None) -> str | None:
    """Return the first non-empty token candidate from the provided values."""
    for candidate in candidates:
        if candidate:
            return candidate
    return None


def _validate_candidate(
    provided_token: str | None,
    *,
    context: str,
    expected: str | None = None,
) -> tuple[bool, str | None]:
    """Validate a candidate token and return (is_valid, error_code)."""
    if not provided_token:
        logger.warning("%s missing token", context)
        return False, "missing"
    if not validate_token(provided_token, expected):
        logger.warning("%s invalid token", context)
        return False, "invalid"
    return True, None


def extract_websocket_token(websocket: WebSocket) -> str | None:
    """Pull the token from the query string, falling back to the auth header."""
    return _select_token(
        websocket.query_params.get(WS_TOKEN_QUERY_PARAM),
        websocket.headers.get(WS_TOKEN_HEADER),
    )


def ensure_authenticated(websocket: WebSocket, expected: str | None = None) -> None:
    """Validate the upgrade request's token.

    Raises:
        AuthenticationFailedError: The token is missing or does not match.
    """
    ok, error = _validate_candidate(
        extract_websocket_token(websocket),
        context="WebSocket upgrade",
        expected=expected,
    )
    if not ok:
        raise AuthenticationFailedError(error or "invalid")


async def authenticate_websocket(websocket: WebSocket, expected: str | None = None) -> bool:
    """Authenticate a WebSocket upgrade using the shared token.

    Returns:
        True if authenticated, False otherwise
    """
    try:
        ensure_authenticated(websocket, expected)
    except AuthenticationFailedError:
        return False
    logger.debug("WebSocket upgrade authenticated")
    return True


__all__ = [
    "validate_token",
    "extract_websocket_token",
    "ensure_authenticated",
    "authenticate_websocket",
]
