"""Relay transport exception."""


class RelayTransportError(Exception):
    """Raised when either side of an established relay pairing fails.

    The pairing is torn down symmetrically; the error is never retried.
    """


__all__ = ["RelayTransportError"]
