"""In-memory process table used to drive discovery and measurement in tests."""

from __future__ import annotations

from typing import Dict, List, Optional

from proctime.exceptions import MeasurementError, ProcessVanishedError
from proctime.process_times import RawProcessTimes


class FakeProcess:
    def __init__(
        self,
        pid: int,
        name: str = "proc",
        *,
        times: Optional[RawProcessTimes] = None,
        running: bool = True,
    ):
        self.pid = pid
        self._name = name
        self.times = times
        self.running = running
        self.kill_calls = 0
        self.kill_error: Optional[BaseException] = None

    def name(self) -> str:
        return self._name

    def query_times(self) -> RawProcessTimes:
        if self.times is None:
            raise MeasurementError(pid=self.pid)
        return self.times

    def kill(self) -> None:
        self.kill_calls += 1
        if self.kill_error is not None:
            raise self.kill_error
        self.running = False

    def is_running(self) -> bool:
        return self.running


class FakeProcessTable:
    """Maps pids to fake processes and parent pids to child pid lists."""

    def __init__(self) -> None:
        self.processes: Dict[int, FakeProcess] = {}
        self.children: Dict[int, List[int]] = {}
        self.opened: List[int] = []

    def add(self, pid: int, name: str = "proc", *, parent: Optional[int] = None, **kwargs) -> FakeProcess:
        process = FakeProcess(pid, name, **kwargs)
        self.processes[pid] = process
        if parent is not None:
            self.children.setdefault(parent, []).append(pid)
        return process

    def add_vanished_child(self, pid: int, *, parent: int) -> None:
        """A child that is enumerated but can no longer be opened."""
        self.children.setdefault(parent, []).append(pid)

    def list_children(self, pid: int) -> List[int]:
        return list(self.children.get(pid, []))

    def open_process(self, pid: int) -> FakeProcess:
        self.opened.append(pid)
        try:
            return self.processes[pid]
        except KeyError as exc:
            raise ProcessVanishedError(pid=pid) from exc


def raw_times(wall: int, user: int = 0, kernel: int = 0, *, created: int = 1_000) -> RawProcessTimes:
    """Raw accounting for a process that ran *wall* ticks from *created*."""
    return RawProcessTimes(creation_time=created, exit_time=created + wall, kernel_time=kernel, user_time=user)
