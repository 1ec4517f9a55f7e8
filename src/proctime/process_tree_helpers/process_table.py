"""Process table access backed by psutil."""

from __future__ import annotations

import logging
import sys
import time
from typing import List, Optional, Protocol

import psutil

from ..exceptions import MeasurementError, ProcessVanishedError
from ..precise_duration import ticks_from_seconds
from ..process_times import RawProcessTimes

logger = logging.getLogger(__name__)

_WINDOWS_EXECUTABLE_SUFFIX = ".exe"


class ProcessHandle(Protocol):
    """Minimal contract for a live OS process reference."""

    pid: int

    def name(self) -> str: ...

    def query_times(self) -> RawProcessTimes: ...

    def kill(self) -> None: ...

    def is_running(self) -> bool: ...


class ProcessTable(Protocol):
    """Answers the two questions discovery needs from the OS."""

    def list_children(self, pid: int) -> List[int]: ...

    def open_process(self, pid: int) -> ProcessHandle: ...


def _current_timestamp() -> float:
    """Return "now" on the same clock psutil uses for creation times."""
    if sys.platform.startswith("linux") and hasattr(time, "CLOCK_BOOTTIME"):
        # psutil derives create_time from boot time plus ticks since boot
        return psutil.boot_time() + time.clock_gettime(time.CLOCK_BOOTTIME)
    return time.time()


class PsutilProcessHandle:
    """ProcessHandle implementation wrapping ``psutil.Process``."""

    def __init__(self, process: psutil.Process) -> None:
        self._process = process
        self.pid = process.pid
        self._exit_reading: Optional[RawProcessTimes] = None

    def name(self) -> str:
        try:
            name = self._process.name()
        except psutil.Error as exc:
            raise ProcessVanishedError(f"Unable to read name of process {self.pid}", pid=self.pid) from exc
        if sys.platform == "win32" and name.lower().endswith(_WINDOWS_EXECUTABLE_SUFFIX):
            name = name[: -len(_WINDOWS_EXECUTABLE_SUFFIX)]
        return name

    def query_times(self) -> RawProcessTimes:
        """
        Read creation, exit and CPU times of the process.

        A running process reports "now" as its exit time. The first reading
        taken after the process turned into a zombie is kept and returned by
        every later query, so its wall time stops at that reading.

        Raises:
            MeasurementError: If the process can no longer be queried
        """
        if self._exit_reading is not None:
            return self._exit_reading
        try:
            with self._process.oneshot():
                created = self._process.create_time()
                cpu_times = self._process.cpu_times()
                exited_already = self._process.status() == psutil.STATUS_ZOMBIE
        except psutil.Error as exc:
            raise MeasurementError(f"Unable to query process time of {self.pid}", pid=self.pid) from exc

        # Clock granularity can place "now" marginally before creation
        exited = max(_current_timestamp(), created)
        reading = RawProcessTimes(
            creation_time=ticks_from_seconds(created),
            exit_time=ticks_from_seconds(exited),
            kernel_time=ticks_from_seconds(cpu_times.system),
            user_time=ticks_from_seconds(cpu_times.user),
        )
        if exited_already:
            self._exit_reading = reading
        return reading

    def kill(self) -> None:
        """
        Kill the process.

        Raises:
            ProcessVanishedError: If the process already exited
            PermissionError: If the OS refuses the kill
        """
        try:
            self._process.kill()
        except psutil.NoSuchProcess as exc:
            raise ProcessVanishedError(f"Process {self.pid} already exited", pid=self.pid) from exc
        except psutil.AccessDenied as exc:
            raise PermissionError(f"Access denied killing process {self.pid}") from exc

    def is_running(self) -> bool:
        try:
            return self._process.is_running() and self._process.status() != psutil.STATUS_ZOMBIE
        except psutil.NoSuchProcess:
            return False

    def __repr__(self) -> str:
        return f"PsutilProcessHandle(pid={self.pid})"


class PsutilProcessTable:
    """ProcessTable implementation over the live psutil process table."""

    def list_children(self, pid: int) -> List[int]:
        try:
            children = psutil.Process(pid).children(recursive=False)
        except (psutil.NoSuchProcess, psutil.AccessDenied) as exc:
            logger.debug("Unable to list children of process %s: %s", pid, exc)
            return []
        return [child.pid for child in children]

    def open_process(self, pid: int) -> PsutilProcessHandle:
        try:
            return PsutilProcessHandle(psutil.Process(pid))
        except psutil.NoSuchProcess as exc:
            raise ProcessVanishedError(f"Process {pid} vanished before psutil inspection", pid=pid) from exc
        except psutil.AccessDenied as exc:
            raise ProcessVanishedError(f"Access denied inspecting process {pid}", pid=pid) from exc


__all__ = [
    "ProcessHandle",
    "ProcessTable",
    "PsutilProcessHandle",
    "PsutilProcessTable",
]
