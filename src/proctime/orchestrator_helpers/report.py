"""Console rendering of measured times."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from ..console import Colors, ConsoleWriter
from ..process_times import ProcessTimes
from ..time_log import TIMESTAMP_FORMAT
from ..tree_member import TreeMember

TREE_LABEL = "process tree"


def format_header(command_line: str, timestamp: datetime) -> str:
    return f'Measured "{command_line}" at {timestamp.strftime(TIMESTAMP_FORMAT)}'


def format_member_title(member: TreeMember) -> str:
    return f"{member.name} (PID {member.pid})"


def not_found_message(name: str) -> str:
    return f'Process "{name}" was not found in the process tree.'


class ReportPrinter:
    """Prints headers and three-line time blocks through the console writer."""

    def __init__(self, console: ConsoleWriter) -> None:
        self._console = console

    def header(self, command_line: str, timestamp: datetime) -> None:
        self._console.write(format_header(command_line, timestamp), Colors.CYAN)

    def times(self, times: ProcessTimes) -> None:
        self._console.success(times.format_process_times().rstrip("\n"))

    def members(self, members: Iterable[TreeMember]) -> None:
        """One block per member, in discovery order."""
        for member in members:
            self._console.write(format_member_title(member), Colors.BLUE)
            self._console.write(member.times.format_process_times().rstrip("\n"), Colors.BLUE)


__all__ = [
    "ReportPrinter",
    "TREE_LABEL",
    "format_header",
    "format_member_title",
    "not_found_message",
]
