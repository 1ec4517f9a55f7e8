"""Cancellation token wiring user interrupts to process tree termination."""

from __future__ import annotations

import logging
import signal
import threading
from types import FrameType
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    Carries a cancellation request from an interrupt to the measured tree.

    The kill callback is attached once the process tree exists. A request
    that arrives before that is recorded but kills nothing.
    """

    def __init__(self, on_cancel: Optional[Callable[[], None]] = None) -> None:
        self._lock = threading.RLock()
        self._event = threading.Event()
        self._kill_callback: Optional[Callable[[], None]] = None
        self._on_cancel = on_cancel

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def attach(self, kill_callback: Callable[[], None]) -> None:
        with self._lock:
            self._kill_callback = kill_callback

    def cancel(self) -> None:
        """Request cancellation and kill the attached tree, if any."""
        self._event.set()
        with self._lock:
            kill_callback = self._kill_callback
        if kill_callback is None:
            logger.debug("Cancellation requested before the process tree was built")
            return
        if self._on_cancel is not None:
            self._on_cancel()
        kill_callback()


class InterruptHandler:
    """Context manager routing SIGINT to a cancellation token."""

    def __init__(self, token: CancellationToken) -> None:
        self._token = token
        self._previous = None
        self._installed = False

    def _handle(self, signum: int, frame: Optional[FrameType]) -> None:
        _ = frame
        logger.debug("Received signal %s", signum)
        self._token.cancel()

    def __enter__(self) -> InterruptHandler:
        # signal.signal is only allowed from the main thread
        if threading.current_thread() is threading.main_thread():
            self._previous = signal.signal(signal.SIGINT, self._handle)
            self._installed = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._installed:
            signal.signal(signal.SIGINT, self._previous)
            self._installed = False


__all__ = ["CancellationToken", "InterruptHandler"]
