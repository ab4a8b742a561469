"""Per-channel backend slot.

A BackendSlot holds at most one BackendSession for its channel type. It
follows the lazy async singleton pattern: the first get() launches the
backend under the slot lock, concurrent callers wait on the same lock and
receive the session the first caller created.

Every read-then-write sequence (launch-if-absent, release, idle release)
runs under the lock, so launch and release for one channel never
interleave. Slots for different channels share nothing.
"""

from __future__ import annotations

import time
import asyncio
import logging

from ..state import BackendSession, ChannelType
from ..errors import BackendLaunchFailedError, BackendTerminationFailedError
from ..telemetry import get_metrics, capture_error
from .launcher import BackendLauncher

logger = logging.getLogger(__name__)


class BackendSlot:
    """Lazily launched, singly owned backend for one channel type."""

    def __init__(self, channel: ChannelType, launcher: BackendLauncher) -> None:
        self.channel = channel
        self._launcher = launcher
        self._session: BackendSession | None = None
        self._lock = asyncio.Lock()

    @property
    def session(self) -> BackendSession | None:
        """Current session, or None when no backend is registered."""
        return self._session

    def is_live(self) -> bool:
        """True when a session is registered and its backend is still running."""
        session = self._session
        return session is not None and self._launcher.is_alive(session.handle)

    async def get(self) -> BackendSession:
        """Return the live session, launching a backend if needed.

        Raises:
            BackendLaunchFailedError: The launcher failed; no session is kept.
        """
        async with self._lock:
            session = self._session
            if session is not None:
                if self._launcher.is_alive(session.handle):
                    return session
                logger.warning(
                    "%s backend session_id=%s exited unexpectedly; relaunching",
                    self.channel.value,
                    session.session_id,
                )
                await self._discard(session)

            self._session = await self._create_session()
            return self._session

    async def shutdown(self) -> bool:
        """Terminate and forget the session; return whether one existed."""
        async with self._lock:
            session = self._session
            if session is None:
                return False
            await self._discard(session)
            return True

    async def shutdown_if_idle(self, idle_timeout_s: float, now: float | None = None) -> bool:
        """Release the session only if it has been idle longer than the timeout.

        The idle check runs under the slot lock so a session touched by a
        concurrent relay setup is never reclaimed on stale data.
        """
        async with self._lock:
            session = self._session
            if session is None:
                return False
            idle = session.idle_for(time.monotonic() if now is None else now)
            if idle <= idle_timeout_s:
                return False
            logger.info(
                "auto-closing inactive %s backend session_id=%s idle=%.1fs",
                self.channel.value,
                session.session_id,
                idle,
            )
            await self._discard(session)
            get_metrics().backends_reclaimed_total.add(1, {"channel": self.channel.value})
            return True

    def touch(self) -> None:
        """Refresh the session's activity timestamp; no-op when absent."""
        if self._session is not None:
            self._session.touch()

    async def _create_session(self) -> BackendSession:
        attrs = {"channel": self.channel.value}
        start = time.perf_counter()
        try:
            address, handle = await self._launcher.launch(self.channel)
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("failed to launch %s backend: %s", self.channel.value, exc)
            err = BackendLaunchFailedError(self.channel.value, str(exc) or type(exc).__name__)
            get_metrics().backend_launch_failures_total.add(1, attrs)
            capture_error(exc, channel=self.channel.value)
            raise err from exc

        elapsed = time.perf_counter() - start
        session = BackendSession(channel=self.channel, address=address, handle=handle)
        metrics = get_metrics()
        metrics.backend_launches_total.add(1, attrs)
        metrics.backend_launch_duration.record(elapsed, attrs)
        logger.info(
            "%s backend ready session_id=%s address=%s in %.2fs",
            self.channel.value,
            session.session_id,
            address,
            elapsed,
        )
        return session

    async def _discard(self, session: BackendSession) -> None:
        """Unregister, signal relays, then best-effort terminate."""
        self._session = None
        session.closed.set()
        try:
            await self._launcher.terminate(session.handle)
        except Exception as exc:  # noqa: BLE001
            err = BackendTerminationFailedError(self.channel.value, session.session_id, str(exc))
            logger.error("%s", err, exc_info=exc)
            capture_error(err, channel=self.channel.value, session_id=session.session_id)
            return
        logger.info("%s backend closed session_id=%s", self.channel.value, session.session_id)


__all__ = ["BackendSlot"]
