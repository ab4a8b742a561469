"""HTTP front door configuration values.

PORT and HOST select the listening socket. HEALTH_PATH is served without
authentication. Relay upgrades are accepted on ``/<channel>/<segment>``
where the segment must equal RELAY_PATH_SEGMENT.
"""

from __future__ import annotations

import os

PORT = int(os.getenv("PORT", "3000"))
HOST = os.getenv("HOST", "0.0.0.0")
HEALTH_PATH = os.getenv("HEALTH_PATH", "/health")
RELAY_PATH_SEGMENT = os.getenv("RELAY_PATH_SEGMENT", "playwright")
# Hostname advertised in the startup connect hints
PUBLIC_HOST = os.getenv("PUBLIC_HOST", "your-host")

__all__ = [
    "PORT",
    "HOST",
    "HEALTH_PATH",
    "RELAY_PATH_SEGMENT",
    "PUBLIC_HOST",
]
