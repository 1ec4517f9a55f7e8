"""Helper modules for process tree discovery."""

from .discovery import DiscoveryResult, discover_descendants
from .process_table import ProcessHandle, ProcessTable, PsutilProcessHandle, PsutilProcessTable

__all__ = [
    "DiscoveryResult",
    "ProcessHandle",
    "ProcessTable",
    "PsutilProcessHandle",
    "PsutilProcessTable",
    "discover_descendants",
]
