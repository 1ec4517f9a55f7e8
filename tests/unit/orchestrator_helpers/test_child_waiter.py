"""Tests for non-reaping exit detection."""

from __future__ import annotations

import os
import subprocess
import sys
import time

import psutil
import pytest

from proctime.orchestrator_helpers.child_waiter import ChildWaiter


def _wait_until_exited(waiter: ChildWaiter, timeout: float = 10.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if waiter.has_exited():
            return True
        time.sleep(0.01)
    return False


def test_running_child_has_not_exited() -> None:
    proc = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(30)"])
    try:
        assert ChildWaiter(proc).has_exited() is False
    finally:
        proc.kill()
        proc.wait()


@pytest.mark.skipif(not hasattr(os, "waitid"), reason="needs os.waitid")
def test_exited_child_stays_queryable_until_reaped() -> None:
    proc = subprocess.Popen([sys.executable, "-c", "raise SystemExit(3)"])
    waiter = ChildWaiter(proc)

    assert _wait_until_exited(waiter)
    # Not reaped yet, so the process can still be inspected
    assert psutil.Process(proc.pid).cpu_times() is not None

    assert waiter.reap() == 3
    assert waiter.has_exited() is True
