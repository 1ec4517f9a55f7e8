"""Background threads forwarding child stdout/stderr to the console."""

from __future__ import annotations

import logging
import threading
from typing import IO, List, Optional

from ..console import Colors, ConsoleWriter

logger = logging.getLogger(__name__)


class OutputPump:
    """Reads the child's pipes line by line and echoes non-blank lines."""

    def __init__(self, console: ConsoleWriter) -> None:
        self._console = console
        self._threads: List[threading.Thread] = []

    def start(self, stdout: Optional[IO[str]], stderr: Optional[IO[str]]) -> None:
        if stdout is not None:
            self._start_thread(stdout, error=False, name="proctime-stdout")
        if stderr is not None:
            self._start_thread(stderr, error=True, name="proctime-stderr")

    def _start_thread(self, stream: IO[str], *, error: bool, name: str) -> None:
        thread = threading.Thread(target=self._pump, args=(stream, error), name=name, daemon=True)
        thread.start()
        self._threads.append(thread)

    def _pump(self, stream: IO[str], error: bool) -> None:
        try:
            for line in iter(stream.readline, ""):
                text = line.rstrip("\r\n")
                if not text.strip():
                    continue
                if error:
                    self._console.write(text, Colors.RED, error=True)
                else:
                    self._console.write(text)
        except (OSError, ValueError) as exc:
            logger.debug("Output pump stopped: %s", exc)
        finally:
            stream.close()

    def join(self) -> None:
        """Wait until every writer of the pipes has closed them."""
        for thread in self._threads:
            thread.join()
        self._threads.clear()


__all__ = ["OutputPump"]
