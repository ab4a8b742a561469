"""Unit tests for the session table (per-channel singleton backends)."""

from __future__ import annotations

import asyncio
import logging

import pytest

from browser_proxy.backends import SessionTable
from browser_proxy.errors import BackendLaunchFailedError
from browser_proxy.state import ChannelType
from tests.helpers import FakeLauncher


def test_acquire_launches_once_under_concurrent_callers() -> None:
    async def _run() -> None:
        launcher = FakeLauncher("ws://backend/", delay_s=0.02)
        table = SessionTable(launcher)

        addresses = await asyncio.gather(*(table.acquire(ChannelType.CHROMIUM) for _ in range(10)))

        assert launcher.launches == [ChannelType.CHROMIUM]
        assert set(addresses) == {"ws://backend/"}
        assert table.active_count() == 1

    asyncio.run(_run())


def test_concurrent_acquire_for_two_channels_launches_each_once() -> None:
    async def _run() -> None:
        launcher = FakeLauncher(lambda channel: f"ws://{channel.value}/", delay_s=0.01)
        table = SessionTable(launcher)

        results = await asyncio.gather(
            table.acquire(ChannelType.FIREFOX),
            table.acquire(ChannelType.WEBKIT),
            table.acquire(ChannelType.FIREFOX),
        )

        assert results == ["ws://firefox/", "ws://webkit/", "ws://firefox/"]
        assert sorted(launcher.launches) == sorted([ChannelType.FIREFOX, ChannelType.WEBKIT])
        assert table.active_count() == 2

    asyncio.run(_run())


def test_acquire_reuses_existing_session() -> None:
    async def _run() -> None:
        launcher = FakeLauncher()
        table = SessionTable(launcher)

        first = await table.acquire_session(ChannelType.CHROMIUM)
        second = await table.acquire_session(ChannelType.CHROMIUM)

        assert first is second
        assert len(launcher.launches) == 1

    asyncio.run(_run())


def test_launch_failure_leaves_no_session_and_next_acquire_retries() -> None:
    async def _run() -> None:
        launcher = FakeLauncher(fail=OSError("spawn failed"))
        table = SessionTable(launcher)

        with pytest.raises(BackendLaunchFailedError, match="spawn failed"):
            await table.acquire(ChannelType.WEBKIT)
        assert table.get(ChannelType.WEBKIT) is None
        assert table.active_count() == 0

        launcher.fail = None
        address = await table.acquire(ChannelType.WEBKIT)

        assert address == launcher.address
        assert launcher.launches == [ChannelType.WEBKIT, ChannelType.WEBKIT]

    asyncio.run(_run())


def test_release_terminates_and_reports_presence() -> None:
    async def _run() -> None:
        launcher = FakeLauncher()
        table = SessionTable(launcher)
        session = await table.acquire_session(ChannelType.CHROMIUM)

        assert await table.release(ChannelType.CHROMIUM) is True
        assert await table.release(ChannelType.CHROMIUM) is False
        assert launcher.terminated == [session.handle]
        assert session.is_closed
        assert table.get(ChannelType.CHROMIUM) is None

    asyncio.run(_run())


def test_release_removes_session_even_when_termination_fails(caplog: pytest.LogCaptureFixture) -> None:
    async def _run() -> None:
        launcher = FakeLauncher(terminate_error=RuntimeError("stuck process"))
        table = SessionTable(launcher)
        await table.acquire(ChannelType.FIREFOX)

        with caplog.at_level(logging.ERROR, logger="browser_proxy"):
            assert await table.release(ChannelType.FIREFOX) is True

        assert table.get(ChannelType.FIREFOX) is None
        assert "stuck process" in caplog.text

        launcher.terminate_error = None
        await table.acquire(ChannelType.FIREFOX)
        assert len(launcher.launches) == 2

    asyncio.run(_run())


def test_touch_is_noop_without_session_and_refreshes_activity() -> None:
    async def _run() -> None:
        table = SessionTable(FakeLauncher())
        table.touch(ChannelType.CHROMIUM)
        assert table.get(ChannelType.CHROMIUM) is None

        session = await table.acquire_session(ChannelType.CHROMIUM)
        session.last_activity -= 100.0
        table.touch(ChannelType.CHROMIUM)

        assert session.idle_for() < 1.0

    asyncio.run(_run())


def test_acquire_relaunches_when_backend_exited() -> None:
    async def _run() -> None:
        launcher = FakeLauncher()
        table = SessionTable(launcher)
        dead = await table.acquire_session(ChannelType.CHROMIUM)
        launcher.crash(dead.handle)

        fresh = await table.acquire_session(ChannelType.CHROMIUM)

        assert fresh is not dead
        assert fresh.session_id != dead.session_id
        assert dead.is_closed
        assert len(launcher.launches) == 2

    asyncio.run(_run())


def test_active_count_skips_exited_backends() -> None:
    async def _run() -> None:
        launcher = FakeLauncher()
        table = SessionTable(launcher)
        dead = await table.acquire_session(ChannelType.CHROMIUM)
        await table.acquire(ChannelType.FIREFOX)
        launcher.crash(dead.handle)

        assert table.active_count() == 1

        await table.acquire(ChannelType.CHROMIUM)
        assert table.active_count() == 2

    asyncio.run(_run())


def test_release_waits_for_inflight_launch() -> None:
    async def _run() -> None:
        launcher = FakeLauncher(delay_s=0.02)
        table = SessionTable(launcher)

        acquire_task = asyncio.create_task(table.acquire(ChannelType.WEBKIT))
        await asyncio.sleep(0)
        released = await table.release(ChannelType.WEBKIT)
        await acquire_task

        assert released is True
        assert table.get(ChannelType.WEBKIT) is None
        assert len(launcher.terminated) == 1

    asyncio.run(_run())


def test_teardown_releases_every_session() -> None:
    async def _run() -> None:
        launcher = FakeLauncher()
        table = SessionTable(launcher)
        for channel in ChannelType:
            await table.acquire(channel)

        await table.teardown()

        assert table.active_count() == 0
        assert len(launcher.terminated) == len(ChannelType)

    asyncio.run(_run())


def test_snapshot_lists_live_sessions() -> None:
    async def _run() -> None:
        table = SessionTable(FakeLauncher("ws://only/"))
        session = await table.acquire_session(ChannelType.FIREFOX)

        snapshot = table.snapshot()

        assert list(snapshot) == ["firefox"]
        assert snapshot["firefox"]["session_id"] == session.session_id
        assert snapshot["firefox"]["address"] == "ws://only/"

    asyncio.run(_run())
