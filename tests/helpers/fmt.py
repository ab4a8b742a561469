"""Terminal output formatting for the live proxy testers."""

from __future__ import annotations

import sys

# ANSI color codes (disabled if not a tty)
_USE_COLOR = sys.stdout.isatty()


def _c(code: str, text: str) -> str:
    if not _USE_COLOR:
        return text
    return f"\033[{code}m{text}\033[0m"


def dim(text: str) -> str:
    return _c("2", text)


def bold(text: str) -> str:
    return _c("1", text)


def green(text: str) -> str:
    return _c("32", text)


def red(text: str) -> str:
    return _c("31", text)


def section_header(title: str, width: int = 60) -> str:
    """Create a prominent section header."""
    padding = width - len(title) - 4
    left = padding // 2
    right = padding - left
    return bold(f"{'─' * left}[ {title} ]{'─' * right}")


def connection_test_header(name: str) -> str:
    return f"\n{bold(f'▶ {name.upper()}')} scenario"


def connection_status(label: str, message: str) -> str:
    return dim(f"  [{label}] {message}")


def connection_pass(label: str) -> str:
    return f"  {green('✓')} [{label}] {green('PASS')}"


def connection_fail(label: str, reason: str) -> str:
    return f"  {red('✗')} [{label}] {red('FAIL')}: {reason}"


__all__ = [
    "dim",
    "bold",
    "green",
    "red",
    "section_header",
    "connection_test_header",
    "connection_status",
    "connection_pass",
    "connection_fail",
]
