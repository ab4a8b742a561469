from __future__ import annotations

import os
from argparse import ArgumentParser

from tests.config import DEFAULT_PROXY_WS_URL, DEFAULT_CHANNEL


def add_connection_args(
    parser: ArgumentParser,
    *,
    server_help: str | None = None,
) -> None:
    """
    Register standard connection flags for the live testers.

    - ``--server`` defaults to ``PROXY_WS_URL`` env or ``DEFAULT_PROXY_WS_URL``.
    - ``--token`` defaults to ``REMOTE_BROWSER_SERVER_AUTH_TOKEN`` env.
    - ``--channel`` selects the backend family to exercise.
    """

    default_server = os.getenv("PROXY_WS_URL", DEFAULT_PROXY_WS_URL)
    parser.add_argument(
        "--server",
        default=default_server,
        help=server_help or f"Proxy base URL (default env PROXY_WS_URL or {DEFAULT_PROXY_WS_URL})",
    )
    parser.add_argument(
        "--token",
        default=os.getenv("REMOTE_BROWSER_SERVER_AUTH_TOKEN"),
        help="Shared auth token (default env REMOTE_BROWSER_SERVER_AUTH_TOKEN)",
    )
    parser.add_argument(
        "--channel",
        default=DEFAULT_CHANNEL,
        choices=["chromium", "firefox", "webkit"],
        help=f"Channel type to connect to (default: {DEFAULT_CHANNEL})",
    )


__all__ = ["add_connection_args"]
