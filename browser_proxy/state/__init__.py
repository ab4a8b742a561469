"""Centralized state definitions for the browser proxy."""

from .session import BackendSession
from .channels import ChannelType, parse_channel_type

__all__ = [
    "BackendSession",
    "ChannelType",
    "parse_channel_type",
]
