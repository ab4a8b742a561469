"""Backend session dataclass.

BackendSession records one running backend process for a channel type:

- session_id: Opaque identifier generated when the backend is launched.
- address: WebSocket URL of the backend's own endpoint. The relay only
  ever opens fresh outbound connections to this address.
- handle: Launcher-specific object used to terminate the process later.
- last_activity: Monotonic timestamp refreshed by touch(). The idle
  reclaimer compares it against the configured timeout.
- closed: Set once the session is released so active relays can tear
  down their pairings.
"""

from __future__ import annotations

import time
import uuid
import asyncio
from typing import Any
from dataclasses import field, dataclass

from .channels import ChannelType


def _new_session_id() -> str:
    return str(uuid.uuid4())


@dataclass
class BackendSession:
    """One live backend process and its reachability/activity metadata."""

    channel: ChannelType
    address: str
    handle: Any
    session_id: str = field(default_factory=_new_session_id)
    created_at: float = field(default_factory=time.monotonic)
    last_activity: float = field(default_factory=time.monotonic)
    closed: asyncio.Event = field(default_factory=asyncio.Event, repr=False)

    def touch(self) -> None:
        """Record recent activity (resets the idle countdown)."""
        self.last_activity = time.monotonic()

    def idle_for(self, now: float | None = None) -> float:
        """Seconds since the last recorded activity."""
        current = time.monotonic() if now is None else now
        return max(0.0, current - self.last_activity)

    @property
    def is_closed(self) -> bool:
        return self.closed.is_set()


__all__ = ["BackendSession"]
