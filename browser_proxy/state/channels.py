"""Channel type enumeration.

A channel type selects which backend family a relay request targets. The
set is fixed; each member owns at most one live backend at a time.
"""

from __future__ import annotations

from enum import Enum

from ..errors import UnknownChannelTypeError


class ChannelType(str, Enum):
    """Backend families the proxy can serve."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


def parse_channel_type(raw: str) -> ChannelType:
    """Return the ChannelType named by ``raw`` or raise UnknownChannelTypeError."""
    try:
        return ChannelType(raw)
    except ValueError:
        raise UnknownChannelTypeError(raw) from None


__all__ = ["ChannelType", "parse_channel_type"]
