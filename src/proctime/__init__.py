"""Run a program and measure wall, kernel and user time of its process tree."""

from .exceptions import (
    ApplicationError,
    DurationOverflowError,
    InvalidArgumentError,
    MeasurementError,
    ProcessVanishedError,
    UsageError,
)
from .precise_duration import MAX_TICKS, PreciseDuration
from .process_times import ProcessTimes, RawProcessTimes
from .process_tree import ProcessTree
from .tree_member import TreeMember

__version__ = "1.0.0"

__all__ = [
    "ApplicationError",
    "DurationOverflowError",
    "InvalidArgumentError",
    "MAX_TICKS",
    "MeasurementError",
    "PreciseDuration",
    "ProcessTimes",
    "ProcessTree",
    "ProcessVanishedError",
    "RawProcessTimes",
    "TreeMember",
    "UsageError",
]
