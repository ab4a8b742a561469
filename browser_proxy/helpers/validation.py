"""Environment validation helpers."""

from __future__ import annotations

from browser_proxy.config.server import PORT, RELAY_PATH_SEGMENT
from browser_proxy.config.secrets import AUTH_TOKEN
from browser_proxy.config.backend import BACKEND_LAUNCH_COMMAND, BACKEND_STARTUP_TIMEOUT_S
from browser_proxy.config.sessions import AUTO_CLOSE_TIMEOUT_S, IDLE_SWEEP_INTERVAL_S


def collect_env_errors(
    *,
    auth_token: str | None = AUTH_TOKEN,
    idle_timeout_s: float = AUTO_CLOSE_TIMEOUT_S,
    sweep_interval_s: float = IDLE_SWEEP_INTERVAL_S,
) -> list[str]:
    """Return a list of human-readable configuration problems."""
    errors: list[str] = []

    if not auth_token:
        errors.append("REMOTE_BROWSER_SERVER_AUTH_TOKEN environment variable is required")

    if not 0 < PORT < 65536:
        errors.append(f"PORT must be between 1 and 65535, got: {PORT}")

    if idle_timeout_s <= 0:
        errors.append(f"AUTO_CLOSE_TIMEOUT must be positive (milliseconds), got: {idle_timeout_s * 1000:.0f}")
    if sweep_interval_s <= 0:
        errors.append(f"IDLE_SWEEP_INTERVAL_S must be positive, got: {sweep_interval_s}")

    if BACKEND_STARTUP_TIMEOUT_S <= 0:
        errors.append(f"BACKEND_STARTUP_TIMEOUT_S must be positive, got: {BACKEND_STARTUP_TIMEOUT_S}")
    if "{port}" not in BACKEND_LAUNCH_COMMAND:
        errors.append("BACKEND_LAUNCH_COMMAND must contain a {port} placeholder")

    if not RELAY_PATH_SEGMENT or "/" in RELAY_PATH_SEGMENT:
        errors.append(f"RELAY_PATH_SEGMENT must be a single path segment, got: {RELAY_PATH_SEGMENT!r}")

    return errors


def validate_env(**overrides) -> None:
    """Validate required configuration once during startup."""
    errors = collect_env_errors(**overrides)
    if errors:
        raise ValueError("Configuration errors:\n  - " + "\n  - ".join(errors))


__all__ = ["collect_env_errors", "validate_env"]
