"""Centralized exception classes for the browser proxy.

Organization:
    - request.py: Upgrade rejections (bad token, unknown channel)
    - backend.py: Backend launch and termination failures
    - relay.py: Transport failures inside an established pairing
    - classify.py: Exception-to-label mapping for logs
"""

from .relay import RelayTransportError
from .classify import classify_error
from .request import AuthenticationFailedError, UnknownChannelTypeError
from .backend import BackendLaunchFailedError, BackendTerminationFailedError

__all__ = [
    # Request rejections
    "AuthenticationFailedError",
    "UnknownChannelTypeError",
    # Backend lifecycle
    "BackendLaunchFailedError",
    "BackendTerminationFailedError",
    # Relay
    "RelayTransportError",
    # Classification
    "classify_error",
]
