"""Session table: one backend slot per channel type.

SessionTable is the only shared mutable state in the proxy. It is created
once at application startup, handed to the relay and the idle reclaimer,
and torn down on shutdown (which terminates every backend).

Operations:
    acquire(channel)      -> address of a live backend (launched on demand)
    acquire_session(...)  -> the BackendSession itself (used by the relay)
    touch(channel)        -> refresh activity; no-op when absent
    release(channel)      -> terminate and remove; True if one was present
    release_if_idle(...)  -> idle-gated release used by the reclaimer
    teardown()            -> release everything
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Iterator

from ..state import BackendSession, ChannelType
from .launcher import BackendLauncher
from .slot import BackendSlot

logger = logging.getLogger(__name__)


class SessionTable:
    """Maps each channel type to at most one live backend session."""

    def __init__(
        self,
        launcher: BackendLauncher,
        channels: Iterable[ChannelType] = tuple(ChannelType),
    ) -> None:
        self._slots: dict[ChannelType, BackendSlot] = {
            channel: BackendSlot(channel, launcher) for channel in channels
        }

    @property
    def channels(self) -> tuple[ChannelType, ...]:
        return tuple(self._slots)

    def _slot(self, channel: ChannelType) -> BackendSlot:
        return self._slots[channel]

    async def acquire_session(self, channel: ChannelType) -> BackendSession:
        """Return the live session for ``channel``, launching one if absent.

        Raises:
            BackendLaunchFailedError: The backend could not be started.
        """
        return await self._slot(channel).get()

    async def acquire(self, channel: ChannelType) -> str:
        """Return the reachable address of a live backend for ``channel``."""
        session = await self.acquire_session(channel)
        return session.address

    def touch(self, channel: ChannelType) -> None:
        self._slot(channel).touch()

    async def release(self, channel: ChannelType) -> bool:
        """Terminate the backend for ``channel``; return whether one existed.

        Termination failures are logged by the slot and never raised.
        """
        return await self._slot(channel).shutdown()

    async def release_if_idle(
        self,
        channel: ChannelType,
        idle_timeout_s: float,
        now: float | None = None,
    ) -> bool:
        return await self._slot(channel).shutdown_if_idle(idle_timeout_s, now=now)

    def get(self, channel: ChannelType) -> BackendSession | None:
        return self._slot(channel).session

    def sessions(self) -> Iterator[tuple[ChannelType, BackendSession]]:
        """Yield (channel, session) for every registered session."""
        for channel, slot in self._slots.items():
            session = slot.session
            if session is not None:
                yield channel, session

    def active_count(self) -> int:
        """Number of sessions whose backend process is still running."""
        return sum(1 for slot in self._slots.values() if slot.is_live())

    def snapshot(self) -> dict[str, dict[str, object]]:
        """Per-channel view of live sessions for diagnostics."""
        return {
            channel.value: {
                "session_id": session.session_id,
                "address": session.address,
                "idle_s": round(session.idle_for(), 3),
            }
            for channel, session in self.sessions()
        }

    async def teardown(self) -> None:
        """Release every session (process shutdown)."""
        results = await asyncio.gather(*(self.release(channel) for channel in self._slots))
        closed = sum(1 for released in results if released)
        logger.info("session table teardown: closed %s backend(s)", closed)


__all__ = ["SessionTable"]
