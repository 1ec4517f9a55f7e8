"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture
def restore_root_logger():
    """Drop handlers installed by setup_logging and restore the root level."""
    root = logging.getLogger()
    saved_level = root.level

    yield root

    for handler in list(root.handlers):
        if getattr(handler, "_proctime_handler", False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
