"""
Process tree discovery and time aggregation.

A ProcessTree is built from the handle of a running root process. At
construction it walks the process table to find every descendant and keeps
them as a flat list of TreeMember objects, ordered deepest descendants first.
The tree can then measure all members, aggregate their times, look a member
up by name and kill the whole tree.

Aggregation is asymmetric: the wall time of the tree is the longest wall time
of any member, while user and kernel times are summed across members.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from .process_times import ProcessTimes
from .process_tree_helpers.discovery import discover_descendants
from .process_tree_helpers.process_table import ProcessHandle, ProcessTable
from .tree_member import TreeMember

logger = logging.getLogger(__name__)


class ProcessTree:
    """Flat collection of a root process and all its descendants.

    With ``include_root`` (the default) the root is an ordinary member and is
    enumerated last. Without it the root is kept in ``root_member`` and
    enumeration yields descendants only; measurement, aggregation, lookup and
    termination still cover the root.
    """

    def __init__(
        self,
        root_process: ProcessHandle,
        process_table: ProcessTable,
        *,
        include_root: bool = True,
    ) -> None:
        self._process_table = process_table
        self._include_root = include_root
        self._members: List[TreeMember] = []
        self._is_valid = True
        self.root_member = TreeMember(root_process)
        self._fill_process_tree()

    @property
    def is_valid(self) -> bool:
        """False once any process vanished between enumeration and lookup."""
        return self._is_valid

    def _fill_process_tree(self) -> None:
        result = discover_descendants(self.root_member, self._process_table)
        if not result.is_valid:
            self._is_valid = False
        self._members = self._without_root(result.members)

    def _without_root(self, members: List[TreeMember]) -> List[TreeMember]:
        if self._include_root:
            return members
        return [member for member in members if member is not self.root_member]

    def rediscover(self) -> None:
        """
        Repeat discovery to pick up processes spawned since the last walk.

        Existing members are reused so their measurements survive. Members
        that are no longer reachable stay in the tree ahead of the
        rediscovered ones, in their previous order.
        """
        known: Dict[int, TreeMember] = {member.pid: member for member in self._all_members()}
        result = discover_descendants(self.root_member, self._process_table, known_members=known)
        if not result.is_valid:
            self._is_valid = False

        reachable = {member.pid for member in result.members}
        unreachable = [member for member in self._members if member.pid not in reachable]
        added = len(reachable - known.keys())
        if added:
            logger.debug("Rediscovery found %d new processes", added)
        self._members = unreachable + self._without_root(result.members)

    def _all_members(self) -> List[TreeMember]:
        if self._include_root:
            return list(self._members)
        return [*self._members, self.root_member]

    def get_overall_tree_time(self) -> ProcessTimes:
        """Longest wall time across members, summed user and kernel times."""
        max_wall_time_ticks = 0
        user_time_ticks = 0
        kernel_time_ticks = 0
        for member in self._all_members():
            max_wall_time_ticks = max(max_wall_time_ticks, member.times.wall_time.ticks)
            user_time_ticks += member.times.user_time.ticks
            kernel_time_ticks += member.times.kernel_time.ticks
        return ProcessTimes.from_ticks(max_wall_time_ticks, user_time_ticks, kernel_time_ticks)

    def measure_execution_time_of_tree(self, *, report_failures: bool = True) -> List[TreeMember]:
        """
        Measure execution time of all processes in the tree.

        A failed measurement keeps the member's previous value. Failures of
        members that were never measured are logged as warnings when
        *report_failures* is set.

        Returns:
            Members whose measurement failed
        """
        failed: List[TreeMember] = []
        for member in self._all_members():
            if member.measure():
                continue
            failed.append(member)
            if report_failures and not member.has_measurement:
                logger.warning("Failed to measure execution time of %s", member.name)
            else:
                logger.debug("Keeping previous measurement of %s (PID %s)", member.name, member.pid)
        return failed

    def kill_process_tree(self) -> None:
        """Kill all processes in the tree."""
        for member in self._all_members():
            member.terminate()

    def has_running_members(self) -> bool:
        return any(member.is_running() for member in self._all_members())

    def try_get_measured_process(self, name: str) -> Tuple[ProcessTimes, bool]:
        """
        Look up a member by process name, ignoring case.

        When several members share the name the first one in discovery order
        wins. Returns the member's own measurement, not an aggregate.
        """
        member = self.find_member(name)
        if member is None:
            return ProcessTimes.ZERO, False
        return member.times, True

    def find_member(self, name: str) -> Optional[TreeMember]:
        wanted = name.casefold()
        for member in self._all_members():
            if member.name.casefold() == wanted:
                return member
        return None

    def __iter__(self) -> Iterator[TreeMember]:
        return iter(list(self._members))

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"ProcessTree(root={self.root_member.pid}, members={len(self._members)}, valid={self._is_valid})"


__all__ = ["ProcessTree"]
