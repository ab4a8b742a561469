"""URL helpers for relay targets and connect hints."""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import urlsplit, parse_qsl, urlencode, urlunsplit


def merge_query(address: str, items: Iterable[tuple[str, str]]) -> str:
    """Append query items to ``address``.

    Keys already present on the address win; the backend's own query
    (for example the browser selector) is never overridden by a client.
    """
    parts = urlsplit(address)
    existing = parse_qsl(parts.query, keep_blank_values=True)
    taken = {key for key, _ in existing}
    merged = existing + [(key, value) for key, value in items if key not in taken]
    return urlunsplit((parts.scheme, parts.netloc, parts.path or "/", urlencode(merged, doseq=True), parts.fragment))


def connect_url(host: str, port: int, channel: str, segment: str, token: str, *, secure: bool = False) -> str:
    """Build the URL a client uses to reach a channel through the proxy."""
    scheme = "wss" if secure else "ws"
    query = urlencode({"token": token})
    return f"{scheme}://{host}:{port}/{channel}/{segment}?{query}"


__all__ = ["merge_query", "connect_url"]
