"""Detect exit of the root process without reaping it."""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)


class ChildWaiter:
    """
    Polls a child for exit while leaving it queryable.

    Where ``os.waitid`` is available the child is observed with ``WNOWAIT``
    so it stays a zombie and its accounting can still be read. ``reap``
    collects it afterwards. Elsewhere the Popen object keeps the process
    handle open, which serves the same purpose.
    """

    def __init__(self, popen: subprocess.Popen) -> None:
        self._popen = popen
        self._use_waitid = hasattr(os, "waitid") and hasattr(os, "WNOWAIT")

    def has_exited(self) -> bool:
        if self._popen.returncode is not None:
            return True
        if not self._use_waitid:
            return self._popen.poll() is not None
        try:
            result = os.waitid(os.P_PID, self._popen.pid, os.WEXITED | os.WNOHANG | os.WNOWAIT)
        except ChildProcessError:
            # Someone else reaped it
            logger.debug("Child %s was already reaped", self._popen.pid)
            return True
        return result is not None

    def reap(self) -> int:
        """Collect the exited child and return its exit code."""
        return self._popen.wait()


__all__ = ["ChildWaiter"]
