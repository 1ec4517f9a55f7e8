"""Append-only log of measured runs."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from .process_times import ProcessTimes

logger = logging.getLogger(__name__)

RECORD_SEPARATOR = "----------------------------------------------------------"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_time_record(*, timestamp: datetime, label: str, command_line: str, times: ProcessTimes) -> str:
    """Build one log record, terminated by the separator line."""
    return (
        f"{timestamp.strftime(TIMESTAMP_FORMAT)}\n"
        f"Measured process: {label}\n"
        f"Command: {command_line}\n"
        f"{times.format_process_times()}"
        f"{RECORD_SEPARATOR}\n"
    )


def append_time_record(
    log_path: Path,
    *,
    timestamp: datetime,
    label: str,
    command_line: str,
    times: ProcessTimes,
) -> None:
    """
    Append a record to *log_path*, creating the file if needed.

    The file is never truncated or rotated.

    Raises:
        OSError: If the file cannot be opened for appending
    """
    record = format_time_record(timestamp=timestamp, label=label, command_line=command_line, times=times)
    with log_path.open("a", encoding="utf-8") as handle:
        handle.write(record)
    logger.debug("Appended time record for %s to %s", label, log_path)


__all__ = ["RECORD_SEPARATOR", "TIMESTAMP_FORMAT", "append_time_record", "format_time_record"]
