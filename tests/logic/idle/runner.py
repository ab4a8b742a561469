"""Live checks against a running proxy.

Exercises the front door and idle reclamation of a deployed proxy with
four scenarios: health probe, unknown channel (404), missing token (401)
and an idle relay that the server must close with 4000. The CLI wrapper
in `tests/idle.py` parses arguments and invokes `run_idle_suite`.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Awaitable

import httpx
from websockets.asyncio.client import connect
from websockets.exceptions import InvalidStatus, ConnectionClosed

from tests.helpers.urls import relay_url, health_url
from tests.helpers.fmt import (
    dim,
    section_header,
    connection_fail,
    connection_pass,
    connection_status,
    connection_test_header,
)

RECLAIMED_CLOSE_CODE = 4000


async def _test_health(server: str, timeout_s: float) -> None:
    url = health_url(server)
    async with httpx.AsyncClient(timeout=timeout_s) as client:
        response = await client.get(url)
    if response.status_code != 200:
        raise RuntimeError(f"GET {url} returned {response.status_code}")
    body = response.json()
    if body.get("status") != "ok":
        raise RuntimeError(f"unexpected health payload {body}")
    print(connection_status("health", f"activeSessions={body.get('activeSessions')}"))


async def _expect_rejection(label: str, url: str, status: int) -> None:
    try:
        async with connect(url, open_timeout=10):
            pass
    except InvalidStatus as exc:
        code = exc.response.status_code
        if code != status:
            raise RuntimeError(f"expected HTTP {status}, got {code}") from None
        print(connection_status(label, f"rejected with HTTP {code}"))
        return
    raise RuntimeError(f"upgrade was accepted; expected HTTP {status}")


async def _test_idle_reclaim(url: str, expect_seconds: float, grace_seconds: float) -> None:
    total_wait = max(0.0, expect_seconds) + max(0.0, grace_seconds)
    if total_wait == 0:
        raise RuntimeError("idle wait is zero; use --idle-expect-seconds")

    async with connect(url, open_timeout=60, max_size=None, ping_interval=None) as ws:
        print(connection_status("idle", f"bridged, waiting up to {total_wait:.0f}s for reclamation..."))
        try:
            await asyncio.wait_for(ws.wait_closed(), timeout=total_wait)
        except asyncio.TimeoutError:
            raise RuntimeError(
                f"server did not close within {total_wait:.0f}s "
                f"(expected idle timeout: {expect_seconds:.0f}s)"
            ) from None
        code, reason = ws.close_code, ws.close_reason
    if code != RECLAIMED_CLOSE_CODE:
        raise RuntimeError(f"expected close code {RECLAIMED_CLOSE_CODE}, got {code} ({reason})")
    print(connection_status("idle", f"server closed (code={code} reason={reason})"))


async def run_idle_suite(
    server: str,
    *,
    token: str,
    channel: str,
    idle_expect_s: float,
    idle_grace_s: float,
    http_timeout_s: float,
) -> bool:
    """Run the live scenarios sequentially and report pass/fail."""

    tests: list[tuple[str, Callable[[], Awaitable[None]]]] = [
        ("health", lambda: _test_health(server, http_timeout_s)),
        ("unknown", lambda: _expect_rejection("unknown", relay_url(server, "opera", token), 404)),
        ("auth", lambda: _expect_rejection("auth", relay_url(server, channel), 401)),
        ("idle", lambda: _test_idle_reclaim(relay_url(server, channel, token), idle_expect_s, idle_grace_s)),
    ]

    print(f"\n{section_header('PROXY LIVE TESTS')}\n")

    passed = 0
    failed = 0
    for label, factory in tests:
        print(connection_test_header(label))
        try:
            await factory()
            print(connection_pass(label))
            passed += 1
        except (ConnectionClosed, OSError, RuntimeError, httpx.HTTPError) as exc:
            failed += 1
            print(connection_fail(label, str(exc)))

    print(f"\n{dim('─' * 40)}")
    if not failed:
        print(f"  All {passed} tests passed")
    else:
        print(f"  {passed} passed, {failed} failed")

    return failed == 0


__all__ = ["run_idle_suite"]
