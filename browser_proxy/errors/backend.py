"""Backend process lifecycle exceptions.

Launch failures surface to the requesting connection as a server error.
Termination failures are logged by the session table and never propagated.
"""


class BackendLaunchFailedError(Exception):
    """Raised when a backend process cannot be started or never becomes ready.

    The session table is left without an entry for the channel; the next
    request starts a fresh attempt.
    """

    def __init__(self, channel: str, message: str) -> None:
        super().__init__(f"failed to launch {channel} backend: {message}")
        self.channel = channel


class BackendTerminationFailedError(Exception):
    """Raised when stopping a backend process fails (best-effort kill)."""

    def __init__(self, channel: str, session_id: str, message: str) -> None:
        super().__init__(f"failed to terminate {channel} backend {session_id}: {message}")
        self.channel = channel
        self.session_id = session_id


__all__ = ["BackendLaunchFailedError", "BackendTerminationFailedError"]
