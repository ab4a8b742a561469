"""Sentry error tracking with per-class rate-limiting."""

from __future__ import annotations

import time
import logging
from typing import Any

import sentry_sdk

from ..logging import _CLIENT, _CHANNEL, _SESSION_ID
from ..config.telemetry import (
    SENTRY_DSN,
    SENTRY_RELEASE,
    SENTRY_TAG_CLIENT,
    SENTRY_ENVIRONMENT,
    SENTRY_SAMPLE_RATE,
    SENTRY_TAG_CHANNEL,
    SENTRY_RATE_LIMIT_S,
    SENTRY_TAG_SESSION_ID,
)

logger = logging.getLogger(__name__)

_error_timestamps: dict[str, float] = {}
_initialized: bool = False


def init_sentry() -> None:
    """Initialize Sentry SDK. Idempotent."""
    global _initialized  # noqa: PLW0603
    if _initialized:
        return

    kwargs: dict[str, Any] = {
        "dsn": SENTRY_DSN,
        "environment": SENTRY_ENVIRONMENT,
        "traces_sample_rate": 0.0,
        "sample_rate": SENTRY_SAMPLE_RATE,
        "attach_stacktrace": True,
    }
    if SENTRY_RELEASE:
        kwargs["release"] = SENTRY_RELEASE

    sentry_sdk.init(**kwargs)
    _initialized = True
    logger.info("Sentry initialized: environment=%s", SENTRY_ENVIRONMENT)


def shutdown_sentry() -> None:
    """Flush Sentry events. Idempotent."""
    global _initialized  # noqa: PLW0603
    if not _initialized:
        return
    sentry_sdk.flush(timeout=2.0)
    _initialized = False


def capture_error(
    error: BaseException,
    *,
    channel: str | None = None,
    session_id: str | None = None,
    client: str | None = None,
    extra: dict[str, Any] | None = None,
) -> None:
    """Report an error to Sentry, at most once per error class per window.

    Tags default to the current log context (channel, session, client).
    """
    if not _initialized:
        return

    key = type(error).__qualname__
    now = time.monotonic()
    last = _error_timestamps.get(key)
    if last is not None and (now - last) < SENTRY_RATE_LIMIT_S:
        return
    _error_timestamps[key] = now

    with sentry_sdk.new_scope() as scope:
        scope.set_tag(SENTRY_TAG_CHANNEL, channel or _CHANNEL.get())
        scope.set_tag(SENTRY_TAG_SESSION_ID, session_id or _SESSION_ID.get())
        scope.set_tag(SENTRY_TAG_CLIENT, client or _CLIENT.get())
        for key_name, value in (extra or {}).items():
            scope.set_extra(key_name, value)
        sentry_sdk.capture_exception(error)


__all__ = ["init_sentry", "shutdown_sentry", "capture_error"]
