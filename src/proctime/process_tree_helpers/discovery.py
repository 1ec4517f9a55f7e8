"""Recursive discovery of the descendants of a process."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from ..exceptions import ProcessVanishedError
from ..tree_member import TreeMember
from .process_table import ProcessTable

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryResult:
    """Members found by one walk, in child-before-parent order."""

    members: List[TreeMember] = field(default_factory=list)
    vanished_pids: List[int] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.vanished_pids


def discover_descendants(
    root: TreeMember,
    process_table: ProcessTable,
    *,
    known_members: Dict[int, TreeMember] | None = None,
) -> DiscoveryResult:
    """
    Walk the process table depth first, post-order, starting at *root*.

    Every child is visited before its parent is registered, so the returned
    members list the deepest descendants first and *root* last. Members in
    *known_members* are reused instead of being reopened. A child that exits
    between enumeration and lookup is recorded in ``vanished_pids`` and the
    walk carries on with its siblings.
    """
    known = known_members if known_members is not None else {}
    result = DiscoveryResult()
    visited: set[int] = set()

    def _visit(pid: int) -> None:
        if pid in visited:
            return
        visited.add(pid)

        for child_pid in process_table.list_children(pid):
            _visit(child_pid)

        if pid == root.pid:
            result.members.append(root)
            return

        member = known.get(pid)
        if member is None:
            try:
                member = TreeMember(process_table.open_process(pid))
            except ProcessVanishedError as exc:
                logger.debug("Process %s vanished during discovery: %s", pid, exc)
                result.vanished_pids.append(pid)
                return
        result.members.append(member)

    _visit(root.pid)
    logger.debug(
        "Discovered %d processes under PID %s (%d vanished)",
        len(result.members),
        root.pid,
        len(result.vanished_pids),
    )
    return result


__all__ = ["DiscoveryResult", "discover_descendants"]
