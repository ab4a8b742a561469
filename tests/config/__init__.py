"""Configuration for the live proxy testers (env overrides over defaults)."""

from .defaults import DEFAULT_CHANNEL, DEFAULT_PROXY_WS_URL
from .idle import IDLE_GRACE_SECONDS, IDLE_EXPECT_SECONDS, HTTP_TIMEOUT_SECONDS

__all__ = [
    "DEFAULT_CHANNEL",
    "DEFAULT_PROXY_WS_URL",
    "IDLE_EXPECT_SECONDS",
    "IDLE_GRACE_SECONDS",
    "HTTP_TIMEOUT_SECONDS",
]
