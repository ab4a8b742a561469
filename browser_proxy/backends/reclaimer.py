"""Idle reclamation for backend sessions.

IdleReclaimer runs a background sweep every ``tick_s`` seconds. Each sweep
releases every session whose last activity is older than
``idle_timeout_s``. Precision is bounded by the tick: a session is
reclaimed at most ``idle_timeout_s + tick_s`` after its last activity.

Usage:
    reclaimer = IdleReclaimer(table)
    reclaimer.start()   # Start sweeping
    ...
    await reclaimer.stop()
"""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib

from ..state import ChannelType
from ..config.sessions import AUTO_CLOSE_TIMEOUT_S, IDLE_SWEEP_INTERVAL_S
from .table import SessionTable

logger = logging.getLogger(__name__)


class IdleReclaimer:
    """Periodically terminates backends idle beyond a threshold.

    Attributes:
        idle_timeout_s: Seconds of inactivity before a backend is released.
        tick_s: Seconds between sweeps.
    """

    def __init__(
        self,
        table: SessionTable,
        idle_timeout_s: float | None = None,
        tick_s: float | None = None,
    ):
        self._table = table
        self.idle_timeout_s = float(AUTO_CLOSE_TIMEOUT_S if idle_timeout_s is None else idle_timeout_s)
        self.tick_s = float(IDLE_SWEEP_INTERVAL_S if tick_s is None else tick_s)
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Start the sweep task (idempotent)."""

        if self._task is None:
            self._stop_event.clear()
            self._task = asyncio.create_task(self._sweep_loop())
        return self._task

    async def stop(self) -> None:
        """Stop the sweep task and wait for it to finish."""

        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def sweep(self, now: float | None = None) -> list[ChannelType]:
        """Run one pass and return the channels whose backends were released."""
        current = time.monotonic() if now is None else now
        released: list[ChannelType] = []
        for channel, session in list(self._table.sessions()):
            if session.idle_for(current) <= self.idle_timeout_s:
                continue
            if await self._table.release_if_idle(channel, self.idle_timeout_s, now=current):
                released.append(channel)
        return released

    async def _sweep_loop(self) -> None:
        logger.info(
            "idle reclaimer started timeout=%.1fs tick=%.1fs",
            self.idle_timeout_s,
            self.tick_s,
        )
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self.tick_s)
                if self._stop_event.is_set():
                    break
                try:
                    await self.sweep()
                except Exception:  # noqa: BLE001
                    logger.exception("idle sweep failed; retrying next tick")
        except asyncio.CancelledError:
            pass  # Normal shutdown path


__all__ = ["IdleReclaimer"]
