"""Backend process launch configuration.

The default launcher starts one ``playwright run-server`` process per
channel type on a free loopback port. BACKEND_LAUNCH_COMMAND is a template
formatted with ``host``, ``port`` and ``channel``; it is split with shlex
before exec.

Timeouts:
    BACKEND_STARTUP_TIMEOUT_S: How long to wait for the backend port to
        accept TCP connections before the launch counts as failed.
    BACKEND_READY_POLL_S: Delay between readiness probes.
    BACKEND_TERMINATE_GRACE_S: Time allowed after SIGTERM before SIGKILL.
"""

from __future__ import annotations

import os

BACKEND_LAUNCH_COMMAND = os.getenv(
    "BACKEND_LAUNCH_COMMAND",
    "playwright run-server --host {host} --port {port}",
)
BACKEND_HOST = os.getenv("BACKEND_HOST", "127.0.0.1")
# Formatted with host, port and channel once the process is ready
BACKEND_ADDRESS_TEMPLATE = os.getenv(
    "BACKEND_ADDRESS_TEMPLATE",
    "ws://{host}:{port}/?browser={channel}",
)
BACKEND_STARTUP_TIMEOUT_S = float(os.getenv("BACKEND_STARTUP_TIMEOUT_S", "30"))
BACKEND_READY_POLL_S = float(os.getenv("BACKEND_READY_POLL_S", "0.1"))
BACKEND_TERMINATE_GRACE_S = float(os.getenv("BACKEND_TERMINATE_GRACE_S", "5"))

__all__ = [
    "BACKEND_LAUNCH_COMMAND",
    "BACKEND_HOST",
    "BACKEND_ADDRESS_TEMPLATE",
    "BACKEND_STARTUP_TIMEOUT_S",
    "BACKEND_READY_POLL_S",
    "BACKEND_TERMINATE_GRACE_S",
]
