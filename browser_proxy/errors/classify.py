"""Exception classification helpers for log labels."""

from __future__ import annotations

from .relay import RelayTransportError
from .request import AuthenticationFailedError, UnknownChannelTypeError
from .backend import BackendLaunchFailedError, BackendTerminationFailedError

ERROR_CATEGORIES: tuple[tuple[type[BaseException], str], ...] = (
    (AuthenticationFailedError, "auth"),
    (UnknownChannelTypeError, "unknown_channel"),
    (BackendLaunchFailedError, "launch_failed"),
    (BackendTerminationFailedError, "terminate_failed"),
    (RelayTransportError, "relay"),
    (TimeoutError, "timeout"),
    (ConnectionError, "connection"),
)


def classify_error(exc: BaseException) -> str:
    """Map an exception to a log-friendly category label."""

    for cls, label in ERROR_CATEGORIES:
        if isinstance(exc, cls):
            return label
    return "unknown"


__all__ = ["ERROR_CATEGORIES", "classify_error"]
