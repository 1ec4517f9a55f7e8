"""
Orchestrates one timed run.

Starts the measured program, builds its process tree, keeps the tree up to
date while waiting for the program and its descendants to exit, and then
prints and logs the measured times.
"""

from __future__ import annotations

import logging
import subprocess
import time
from datetime import datetime
from typing import Callable, Optional

from .cli import ParsedOptions
from .config import TimerSettings
from .console import ConsoleWriter
from .exceptions import ProcessVanishedError
from .orchestrator_helpers import CancellationToken, ChildWaiter, InterruptHandler, OutputPump, ReportPrinter
from .orchestrator_helpers.report import TREE_LABEL, not_found_message
from .process_tree import ProcessTree
from .process_tree_helpers.process_table import ProcessTable, PsutilProcessTable
from .time_log import append_time_record

logger = logging.getLogger(__name__)

EXIT_COMMAND_NOT_FOUND = 127
EXIT_CANCELLED = 130


class TimedRun:
    """A single measured execution of a program."""

    def __init__(
        self,
        options: ParsedOptions,
        settings: TimerSettings,
        *,
        console: Optional[ConsoleWriter] = None,
        process_table: Optional[ProcessTable] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.options = options
        self.settings = settings
        self.console = console if console is not None else ConsoleWriter(use_color=settings.use_color)
        self.process_table = process_table if process_table is not None else PsutilProcessTable()
        self._clock = clock
        self._printer = ReportPrinter(self.console)
        self._pump = OutputPump(self.console)
        self.token = CancellationToken(on_cancel=self._announce_cancellation)
        self.tree: Optional[ProcessTree] = None

    def _announce_cancellation(self) -> None:
        self.console.error("Cancelation request received, killing the child process tree...")

    def _spawn(self) -> subprocess.Popen:
        capture = None if self.options.silent else subprocess.PIPE
        return subprocess.Popen(
            self.options.command,
            stdout=capture,
            stderr=capture,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
            creationflags=getattr(subprocess, "CREATE_NO_WINDOW", 0),
        )

    def run(self) -> int:
        """Run the program; returns the exit code proctime should exit with."""
        started_at = self._clock()
        try:
            popen = self._spawn()
        except OSError as exc:
            self.console.error(f"{self.options.program}: {exc.strerror or exc}")
            return EXIT_COMMAND_NOT_FOUND

        self._pump.start(popen.stdout, popen.stderr)
        with InterruptHandler(self.token):
            self.tree = self._build_tree(popen.pid)
            exit_code = self._wait_for_exit(popen)
        self._pump.join()

        if self.token.cancelled:
            self.console.error("Measurement cancelled.")
            return EXIT_CANCELLED
        if self.tree is None:
            self.console.error(f"Unable to track the process tree of {self.options.program}.")
            return exit_code
        return self._report(self.tree, started_at, exit_code)

    def _build_tree(self, pid: int) -> Optional[ProcessTree]:
        try:
            root = self.process_table.open_process(pid)
            tree = ProcessTree(root, self.process_table, include_root=self.settings.include_root)
        except ProcessVanishedError as exc:
            logger.warning("Measured process %s vanished before it could be tracked: %s", pid, exc)
            return None
        self.token.attach(tree.kill_process_tree)
        return tree

    def _wait_for_exit(self, popen: subprocess.Popen) -> int:
        """Wait for the root and every known descendant to exit."""
        waiter = ChildWaiter(popen)
        tree = self.tree
        poll_interval = self.settings.poll_interval_seconds

        while not waiter.has_exited():
            time.sleep(poll_interval)
            if tree is not None:
                tree.rediscover()
                tree.measure_execution_time_of_tree(report_failures=False)

        if tree is None:
            return waiter.reap()

        # The root is exited but not yet reaped, so this is its final reading
        tree.measure_execution_time_of_tree(report_failures=False)
        exit_code = waiter.reap()

        while tree.has_running_members():
            time.sleep(poll_interval)
            tree.measure_execution_time_of_tree(report_failures=False)

        tree.measure_execution_time_of_tree()
        if not tree.is_valid:
            logger.debug("Some processes exited before they could be tracked")
        return exit_code

    def _report(self, tree: ProcessTree, started_at: datetime, exit_code: int) -> int:
        if self.options.has_measured_process_name:
            name = self.options.measured_process_name
            times, found = tree.try_get_measured_process(name)
            if not found:
                self.console.error(not_found_message(name))
                return exit_code
            label = name
        else:
            times = tree.get_overall_tree_time()
            label = TREE_LABEL

        command_line = self.options.command_line
        self._printer.header(command_line, started_at)
        if self.options.verbose:
            self._printer.members(tree)
        self._printer.times(times)

        log_path = self.settings.log_file_path()
        try:
            append_time_record(log_path, timestamp=started_at, label=label, command_line=command_line, times=times)
        except OSError as exc:
            logger.error("Unable to append to %s: %s", log_path, exc)
        return exit_code


__all__ = ["EXIT_CANCELLED", "EXIT_COMMAND_NOT_FOUND", "TimedRun"]
