"""Tests for cancellation wiring."""

from __future__ import annotations

import os
import signal
import sys
import threading
import time
from unittest.mock import MagicMock

import pytest

from proctime.orchestrator_helpers.cancellation import CancellationToken, InterruptHandler


def test_cancel_before_attach_is_noop() -> None:
    on_cancel = MagicMock()
    token = CancellationToken(on_cancel=on_cancel)

    token.cancel()

    assert token.cancelled is True
    on_cancel.assert_not_called()


def test_cancel_kills_attached_tree() -> None:
    kill = MagicMock()
    on_cancel = MagicMock()
    token = CancellationToken(on_cancel=on_cancel)
    token.attach(kill)

    token.cancel()

    kill.assert_called_once_with()
    on_cancel.assert_called_once_with()


def test_cancel_from_another_thread() -> None:
    kill = MagicMock()
    token = CancellationToken()
    token.attach(kill)

    thread = threading.Thread(target=token.cancel)
    thread.start()
    thread.join()

    kill.assert_called_once_with()


def test_interrupt_handler_restores_previous_handler() -> None:
    previous = signal.getsignal(signal.SIGINT)

    with InterruptHandler(CancellationToken()):
        assert signal.getsignal(signal.SIGINT) is not previous

    assert signal.getsignal(signal.SIGINT) is previous


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signal delivery")
def test_sigint_cancels_token() -> None:
    kill = MagicMock()
    token = CancellationToken()
    token.attach(kill)

    with InterruptHandler(token):
        os.kill(os.getpid(), signal.SIGINT)
        deadline = time.monotonic() + 5
        while not token.cancelled and time.monotonic() < deadline:
            time.sleep(0.01)

    assert token.cancelled is True
    kill.assert_called_once_with()


def test_interrupt_handler_is_inert_off_main_thread() -> None:
    previous = signal.getsignal(signal.SIGINT)
    seen = []

    def _enter() -> None:
        with InterruptHandler(CancellationToken()):
            seen.append(signal.getsignal(signal.SIGINT))

    thread = threading.Thread(target=_enter)
    thread.start()
    thread.join()

    assert seen == [previous]


def test_interrupt_while_attaching_does_not_deadlock() -> None:
    kill = MagicMock()
    token = CancellationToken()
    token.attach(kill)

    # An interrupt on the main thread can land while it holds the token's lock
    with token._lock:
        token.cancel()

    kill.assert_called_once_with()
