"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- server: listening socket and route layout
- secrets: the shared auth token
- sessions: idle timeout and sweep interval
- backend: backend process launch settings
- websocket: relay transport settings and close codes
- logging: log level and format
- telemetry: Sentry and OTel settings (imported directly, not re-exported)

Functions live in browser_proxy/helpers/.
"""

from .server import (
    PORT,
    HOST,
    HEALTH_PATH,
    RELAY_PATH_SEGMENT,
    PUBLIC_HOST,
)
from .secrets import AUTH_TOKEN
from .sessions import AUTO_CLOSE_TIMEOUT_S, IDLE_SWEEP_INTERVAL_S
from .backend import (
    BACKEND_LAUNCH_COMMAND,
    BACKEND_HOST,
    BACKEND_ADDRESS_TEMPLATE,
    BACKEND_STARTUP_TIMEOUT_S,
    BACKEND_READY_POLL_S,
    BACKEND_TERMINATE_GRACE_S,
)
from .websocket import (
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_UNAUTHORIZED_CODE,
    WS_CLOSE_INTERNAL_ERROR_CODE,
    WS_CLOSE_NOT_FOUND_CODE,
    WS_CLOSE_RECLAIMED_CODE,
    WS_CLOSE_RECLAIMED_REASON,
    WS_RELAY_MAX_SIZE,
    WS_BACKEND_CONNECT_TIMEOUT_S,
    WS_FORWARD_HEADER_PREFIXES,
    WS_TOKEN_QUERY_PARAM,
    WS_TOKEN_HEADER,
)
from .logging import APP_LOG_LEVEL, APP_LOG_FORMAT, APP_LOG_DATEFMT

__all__ = [
    "PORT",
    "HOST",
    "HEALTH_PATH",
    "RELAY_PATH_SEGMENT",
    "PUBLIC_HOST",
    "AUTH_TOKEN",
    "AUTO_CLOSE_TIMEOUT_S",
    "IDLE_SWEEP_INTERVAL_S",
    "BACKEND_LAUNCH_COMMAND",
    "BACKEND_HOST",
    "BACKEND_ADDRESS_TEMPLATE",
    "BACKEND_STARTUP_TIMEOUT_S",
    "BACKEND_READY_POLL_S",
    "BACKEND_TERMINATE_GRACE_S",
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
    "APP_LOG_LEVEL",
    "APP_LOG_FORMAT",
    "APP_LOG_DATEFMT",
]
