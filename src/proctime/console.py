"""Coloured console output shared by the main thread and the output pumps."""

from __future__ import annotations

import sys
import threading
from typing import Optional, TextIO


class Colors:
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Optional[str]) -> str:
    """Return colored text for terminal output."""
    if not color:
        return text
    return f"{color}{text}{Colors.RESET}"


class ConsoleWriter:
    """
    Serialises writes to stdout and stderr behind a single lock.

    Child stdout and stderr are pumped from background threads while the
    main thread reports; holding one lock for both streams keeps lines from
    interleaving.
    """

    def __init__(
        self,
        *,
        use_color: bool = True,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self._lock = threading.Lock()
        self._use_color = use_color
        self._stdout = stdout
        self._stderr = stderr

    def _stream(self, error: bool) -> TextIO:
        if error:
            return self._stderr if self._stderr is not None else sys.stderr
        return self._stdout if self._stdout is not None else sys.stdout

    def write(self, message: str, color: Optional[str] = None, *, error: bool = False) -> None:
        """Print *message* followed by a newline, optionally in *color*."""
        text = colored(message, color) if self._use_color else message
        with self._lock:
            stream = self._stream(error)
            stream.write(f"{text}\n")
            stream.flush()

    def error(self, message: str) -> None:
        self.write(message, Colors.RED, error=True)

    def success(self, message: str) -> None:
        self.write(message, Colors.GREEN)


__all__ = ["Colors", "ConsoleWriter", "colored"]
