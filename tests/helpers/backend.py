"""Threaded WebSocket echo server standing in for a browser backend.

Every text or binary frame is echoed back unchanged. The text frame
``__close__ <code>`` makes the server close the connection with that code.
Requests, close codes and connection closures are recorded for assertions.
"""

from __future__ import annotations

import threading
import contextlib
from collections.abc import Iterator
from dataclasses import field, dataclass

from websockets.sync.server import ServerConnection, serve

CLOSE_COMMAND = "__close__"
ECHO_SUBPROTOCOL = "relay.v1"


@dataclass
class EchoBackend:
    """Handle returned by running_echo_backend()."""

    address: str
    paths: list[str] = field(default_factory=list)
    headers: list[dict[str, str]] = field(default_factory=list)
    subprotocols: list[str | None] = field(default_factory=list)
    received: list[str | bytes] = field(default_factory=list)
    close_codes: list[int | None] = field(default_factory=list)
    closed: threading.Event = field(default_factory=threading.Event)
    open_connections: set[ServerConnection] = field(default_factory=set, repr=False)

    @property
    def connections(self) -> int:
        return len(self.paths)


def _make_handler(backend: EchoBackend):
    def handler(conn: ServerConnection) -> None:
        backend.open_connections.add(conn)
        backend.paths.append(conn.request.path)
        backend.headers.append({name.lower(): value for name, value in conn.request.headers.raw_items()})
        backend.subprotocols.append(conn.subprotocol)
        try:
            for message in conn:
                backend.received.append(message)
                if isinstance(message, str) and message.startswith(CLOSE_COMMAND):
                    code = int(message.split()[1])
                    conn.close(code=code, reason="backend closing")
                    break
                conn.send(message)
        finally:
            received = conn.protocol.close_rcvd
            backend.close_codes.append(received.code if received is not None else None)
            backend.open_connections.discard(conn)
            backend.closed.set()

    return handler


def _select_subprotocol(_conn: ServerConnection, offered) -> str | None:
    return ECHO_SUBPROTOCOL if ECHO_SUBPROTOCOL in offered else None


@contextlib.contextmanager
def running_echo_backend() -> Iterator[EchoBackend]:
    """Serve an echo backend on a free loopback port for the block's duration."""
    backend = EchoBackend(address="")
    server = serve(
        _make_handler(backend),
        "127.0.0.1",
        0,
        select_subprotocol=_select_subprotocol,
        close_timeout=1,
    )
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        port = server.socket.getsockname()[1]
        backend.address = f"ws://127.0.0.1:{port}/?browser=chromium"
        yield backend
    finally:
        for conn in list(backend.open_connections):
            with contextlib.suppress(Exception):
                conn.close()
        server.shutdown()
        thread.join(timeout=5)


__all__ = ["CLOSE_COMMAND", "ECHO_SUBPROTOCOL", "EchoBackend", "running_echo_backend"]
