"""Backend process launchers.

The session table never starts processes itself. It is handed a launcher
that satisfies the BackendLauncher protocol:

    launch(channel) -> (address, handle)
        Start a backend for the channel type and return the WebSocket
        address it serves plus an opaque handle.
    terminate(handle) -> None
        Stop the backend identified by the handle.
    is_alive(handle) -> bool
        Report whether the backend process is still running.

SubprocessLauncher is the production implementation. It runs the
configured command (``playwright run-server`` by default) on a free
loopback port, waits until the port accepts TCP connections, and builds the
address from BACKEND_ADDRESS_TEMPLATE.
"""

from __future__ import annotations

import shlex
import socket
import asyncio
import logging
import contextlib
from typing import Any, Protocol
from dataclasses import dataclass

from ..state import ChannelType
from ..config.backend import (
    BACKEND_HOST,
    BACKEND_READY_POLL_S,
    BACKEND_LAUNCH_COMMAND,
    BACKEND_ADDRESS_TEMPLATE,
    BACKEND_STARTUP_TIMEOUT_S,
    BACKEND_TERMINATE_GRACE_S,
)

logger = logging.getLogger(__name__)


class BackendLauncher(Protocol):
    """Capability used by the session table to start and stop backends."""

    async def launch(self, channel: ChannelType) -> tuple[str, Any]: ...

    async def terminate(self, handle: Any) -> None: ...

    def is_alive(self, handle: Any) -> bool: ...


@dataclass
class BackendProcess:
    """Handle for a backend started by SubprocessLauncher."""

    process: asyncio.subprocess.Process
    port: int

    @property
    def pid(self) -> int:
        return self.process.pid


def _pick_free_port(host: str) -> int:
    """Ask the OS for an unused TCP port on ``host``."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        return sock.getsockname()[1]


class SubprocessLauncher:
    """Launch backends as child processes listening on loopback ports."""

    def __init__(
        self,
        command: str = BACKEND_LAUNCH_COMMAND,
        *,
        host: str = BACKEND_HOST,
        address_template: str = BACKEND_ADDRESS_TEMPLATE,
        startup_timeout_s: float = BACKEND_STARTUP_TIMEOUT_S,
        ready_poll_s: float = BACKEND_READY_POLL_S,
        terminate_grace_s: float = BACKEND_TERMINATE_GRACE_S,
    ):
        self._command = command
        self._host = host
        self._address_template = address_template
        self._startup_timeout_s = startup_timeout_s
        self._ready_poll_s = ready_poll_s
        self._terminate_grace_s = terminate_grace_s

    def build_argv(self, channel: ChannelType, port: int) -> list[str]:
        """Render the launch command for a channel and port."""
        rendered = self._command.format(host=self._host, port=port, channel=channel.value)
        return shlex.split(rendered)

    def build_address(self, channel: ChannelType, port: int) -> str:
        return self._address_template.format(host=self._host, port=port, channel=channel.value)

    async def launch(self, channel: ChannelType) -> tuple[str, BackendProcess]:
        port = _pick_free_port(self._host)
        argv = self.build_argv(channel, port)
        logger.info("launching %s backend: %s", channel.value, " ".join(argv))
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            start_new_session=True,
        )
        handle = BackendProcess(process=process, port=port)
        try:
            await asyncio.wait_for(self._wait_ready(handle), timeout=self._startup_timeout_s)
        except asyncio.TimeoutError:
            await self._kill(handle)
            raise TimeoutError(
                f"backend did not listen on {self._host}:{port} within {self._startup_timeout_s:.1f}s"
            ) from None
        except BaseException:
            await self._kill(handle)
            raise
        return self.build_address(channel, port), handle

    async def terminate(self, handle: BackendProcess) -> None:
        process = handle.process
        if process.returncode is not None:
            return
        with contextlib.suppress(ProcessLookupError):
            process.terminate()
        try:
            await asyncio.wait_for(process.wait(), timeout=self._terminate_grace_s)
        except asyncio.TimeoutError:
            logger.warning("backend pid=%s ignored SIGTERM; killing", handle.pid)
            await self._kill(handle)

    def is_alive(self, handle: BackendProcess) -> bool:
        return handle.process.returncode is None

    async def _wait_ready(self, handle: BackendProcess) -> None:
        """Poll until the backend port accepts connections or the process exits."""
        while True:
            if handle.process.returncode is not None:
                raise RuntimeError(f"backend exited with code {handle.process.returncode} before becoming ready")
            try:
                _, writer = await asyncio.open_connection(self._host, handle.port)
            except OSError:
                await asyncio.sleep(self._ready_poll_s)
                continue
            writer.close()
            with contextlib.suppress(Exception):
                await writer.wait_closed()
            return

    async def _kill(self, handle: BackendProcess) -> None:
        process = handle.process
        if process.returncode is not None:
            return
        with contextlib.suppress(ProcessLookupError):
            process.kill()
        await process.wait()


__all__ = ["BackendLauncher", "BackendProcess", "SubprocessLauncher"]
