"""Helper modules for the orchestrator."""

from .cancellation import CancellationToken, InterruptHandler
from .child_waiter import ChildWaiter
from .output_pump import OutputPump
from .report import ReportPrinter

__all__ = [
    "CancellationToken",
    "ChildWaiter",
    "InterruptHandler",
    "OutputPump",
    "ReportPrinter",
]
