"""Upgrade-request rejection exceptions.

These are raised before a relay upgrade is accepted. Each maps onto an
HTTP status returned to the caller; none of them is fatal to the process.
"""


class AuthenticationFailedError(Exception):
    """Raised when the presented token is missing or does not match.

    Attributes:
        reason: Either "missing" or "invalid".
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"authentication failed: {reason} token")
        self.reason = reason


class UnknownChannelTypeError(Exception):
    """Raised when the request path names a channel type that is not served."""

    def __init__(self, channel: str) -> None:
        super().__init__(f"unknown channel type: {channel!r}")
        self.channel = channel


__all__ = ["AuthenticationFailedError", "UnknownChannelTypeError"]
