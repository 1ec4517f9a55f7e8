"""A single process tracked by a process tree."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import InvalidArgumentError, MeasurementError, ProcessVanishedError
from .process_times import ProcessTimes

if TYPE_CHECKING:
    from .process_tree_helpers.process_table import ProcessHandle

logger = logging.getLogger(__name__)


class TreeMember:
    """
    Wraps one OS process (root or descendant) and its last measurement.

    The pid and name are captured at construction because some platforms
    stop exposing process metadata once the process exits.
    """

    def __init__(self, handle: ProcessHandle) -> None:
        self.handle = handle
        self.pid = handle.pid
        self.name = handle.name()
        self.times = ProcessTimes.ZERO
        self.has_measurement = False

    def measure(self) -> bool:
        """
        Query the execution times of the process.

        Returns:
            True if the measurement succeeded. On failure the previous
            measurement is left untouched.
        """
        try:
            measured = ProcessTimes.from_raw(self.handle.query_times())
        except (MeasurementError, InvalidArgumentError) as exc:
            logger.debug("Measurement of %s (PID %s) failed: %s", self.name, self.pid, exc)
            return False

        self.times = measured
        self.has_measurement = True
        return True

    def terminate(self) -> None:
        """Kill the process unless it already exited."""
        if not self.handle.is_running():
            return
        try:
            self.handle.kill()
        except ProcessVanishedError:
            logger.debug("%s (PID %s) exited before termination", self.name, self.pid)
        except PermissionError as exc:
            logger.warning("Access denied while terminating %s (PID %s): %s", self.name, self.pid, exc)

    def is_running(self) -> bool:
        return self.handle.is_running()

    def __repr__(self) -> str:
        return f"TreeMember(pid={self.pid}, name={self.name!r})"


__all__ = ["TreeMember"]
