"""
Centralized logging configuration.

Diagnostics are written to stderr through the root logger. Warnings and
errors are coloured red so they read like the rest of the tool's error
output; timing reports never go through logging.
"""

import logging
import sys
import threading
from typing import Optional, TextIO

from .console import Colors, colored

# Thread-safe lock for logging configuration
_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(levelname)s - %(name)s - %(message)s"
_HANDLER_MARKER = "_proctime_handler"


class ColoredFormatter(logging.Formatter):
    """Formatter that paints WARNING and above in red."""

    def __init__(self, fmt: str = _LOG_FORMAT, *, use_color: bool = True) -> None:
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if self.use_color and record.levelno >= logging.WARNING:
            return colored(message, Colors.RED)
        return message


def _close_handlers(logger: logging.Logger) -> None:
    """Close handlers previously installed by setup_logging, logging any errors."""
    for handler in list(logger.handlers):
        if not getattr(handler, _HANDLER_MARKER, False):
            continue
        try:
            handler.close()
        except OSError as e:  # Best-effort cleanup operation
            _MODULE_LOGGER.debug("Handler close failed: %s", e)
        logger.removeHandler(handler)


def _build_console_handler(debug: bool, use_color: bool, stream: Optional[TextIO]) -> logging.Handler:
    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setFormatter(ColoredFormatter(use_color=use_color))
    console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    setattr(console_handler, _HANDLER_MARKER, True)
    return console_handler


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("psutil").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def setup_logging(debug: bool = False, use_color: bool = True, stream: Optional[TextIO] = None) -> None:
    """Configure the root logger for a proctime run."""

    # Use thread-safe lock to ensure single configuration
    with _config_lock:
        root_logger = logging.getLogger()
        _close_handlers(root_logger)

        root_logger.addHandler(_build_console_handler(debug, use_color, stream))
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)
        _suppress_noisy_third_parties()


__all__ = ["ColoredFormatter", "setup_logging"]
