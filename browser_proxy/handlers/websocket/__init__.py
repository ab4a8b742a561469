"""WebSocket relay handler exports."""

from .relay import relay_frames
from .disconnects import is_expected_disconnect
from .manager import handle_relay_connection, open_backend_connection
from .errors import NOT_FOUND, Rejection, reject_upgrade, rejection_for
from .auth import authenticate_websocket, ensure_authenticated, validate_token

__all__ = [
    "authenticate_websocket",
    "ensure_authenticated",
    "validate_token",
    "handle_relay_connection",
    "open_backend_connection",
    "relay_frames",
    "is_expected_disconnect",
    "NOT_FOUND",
    "Rejection",
    "reject_upgrade",
    "rejection_for",
]
