"""Backend process management: launchers, session table, idle reclaimer."""

from .slot import BackendSlot
from .table import SessionTable
from .reclaimer import IdleReclaimer
from .launcher import BackendLauncher, BackendProcess, SubprocessLauncher

__all__ = [
    "BackendLauncher",
    "BackendProcess",
    "BackendSlot",
    "IdleReclaimer",
    "SessionTable",
    "SubprocessLauncher",
]
