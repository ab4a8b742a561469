"""Backend session lifetime configuration.

AUTO_CLOSE_TIMEOUT is given in milliseconds for compatibility with existing
deployments; it is exposed here in seconds. A session idle longer than
AUTO_CLOSE_TIMEOUT_S is released on the next sweep, so the effective bound
is AUTO_CLOSE_TIMEOUT_S + IDLE_SWEEP_INTERVAL_S.
"""

from __future__ import annotations

import os

AUTO_CLOSE_TIMEOUT_S = float(os.getenv("AUTO_CLOSE_TIMEOUT", "60000")) / 1000.0
IDLE_SWEEP_INTERVAL_S = float(os.getenv("IDLE_SWEEP_INTERVAL_S", "10"))

__all__ = [
    "AUTO_CLOSE_TIMEOUT_S",
    "IDLE_SWEEP_INTERVAL_S",
]
