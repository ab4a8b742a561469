"""Shared test helpers: fake launchers and a threaded echo backend."""

from .launchers import FakeLauncher, unused_port
from .backend import CLOSE_COMMAND, ECHO_SUBPROTOCOL, EchoBackend, running_echo_backend

__all__ = [
    "CLOSE_COMMAND",
    "ECHO_SUBPROTOCOL",
    "EchoBackend",
    "FakeLauncher",
    "running_echo_backend",
    "unused_port",
]
