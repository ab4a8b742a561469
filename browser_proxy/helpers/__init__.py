"""Shared helper functions."""

from .urls import connect_url, merge_query
from .validation import collect_env_errors, validate_env

__all__ = [
    "collect_env_errors",
    "connect_url",
    "merge_query",
    "validate_env",
]
