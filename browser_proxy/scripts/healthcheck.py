"""Container health probe: exit 0 when /health answers 200.

Usage:
    $ python -m browser_proxy.scripts.healthcheck
"""

from __future__ import annotations

import sys

import httpx

from browser_proxy.config.server import PORT, HEALTH_PATH

HEALTHCHECK_TIMEOUT_S = 2.0


def check(url: str, timeout_s: float = HEALTHCHECK_TIMEOUT_S) -> bool:
    """Return True when the health endpoint responds with 200."""
    try:
        response = httpx.get(url, timeout=timeout_s)
    except httpx.HTTPError as exc:
        print(f"ERROR {exc}", file=sys.stderr)
        return False
    print(f"STATUS: {response.status_code}")
    return response.status_code == 200


def main() -> int:
    return 0 if check(f"http://localhost:{PORT}{HEALTH_PATH}") else 1


if __name__ == "__main__":
    sys.exit(main())
