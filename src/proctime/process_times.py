"""Execution-time accounting for a single process."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, NamedTuple

from .precise_duration import PreciseDuration


class RawProcessTimes(NamedTuple):
    """Accounting data as reported by the OS, every field in 100 ns ticks.

    ``creation_time`` and ``exit_time`` are timestamps on a common clock;
    ``kernel_time`` and ``user_time`` are CPU durations.
    """

    creation_time: int
    exit_time: int
    kernel_time: int
    user_time: int


@dataclass(frozen=True)
class ProcessTimes:
    """Wall, user and kernel time of a measured process."""

    wall_time: PreciseDuration
    user_time: PreciseDuration
    kernel_time: PreciseDuration

    ZERO: ClassVar[ProcessTimes]

    @classmethod
    def from_ticks(cls, wall_time_ticks: int, user_time_ticks: int, kernel_time_ticks: int) -> ProcessTimes:
        return cls(
            PreciseDuration.from_ticks(wall_time_ticks),
            PreciseDuration.from_ticks(user_time_ticks),
            PreciseDuration.from_ticks(kernel_time_ticks),
        )

    @classmethod
    def from_raw(cls, raw: RawProcessTimes) -> ProcessTimes:
        """
        Convert raw OS accounting data into durations.

        Wall time is the span between creation and exit.

        Raises:
            InvalidArgumentError: If exit precedes creation or a CPU time is negative
        """
        wall_time = PreciseDuration.from_ticks(raw.exit_time) - PreciseDuration.from_ticks(raw.creation_time)
        return cls(
            wall_time,
            PreciseDuration.from_ticks(raw.user_time),
            PreciseDuration.from_ticks(raw.kernel_time),
        )

    def format_process_times(self) -> str:
        """Render the three-line Wall/Kernel/User report, one line per time."""
        lines = [
            f"Wall time:\t{self.wall_time.format()}",
            f"Kernel time:\t{self.kernel_time.format()}",
            f"User time:\t{self.user_time.format()}",
        ]
        return "".join(f"{line}\n" for line in lines)


ProcessTimes.ZERO = ProcessTimes(PreciseDuration.ZERO, PreciseDuration.ZERO, PreciseDuration.ZERO)


__all__ = ["ProcessTimes", "RawProcessTimes"]
