"""Tests for the append-only time log."""

from __future__ import annotations

from datetime import datetime

from proctime.process_times import ProcessTimes
from proctime.time_log import RECORD_SEPARATOR, append_time_record, format_time_record

TIMESTAMP = datetime(2024, 5, 17, 8, 30, 15)


def test_separator_is_fixed() -> None:
    assert RECORD_SEPARATOR == "-" * 58


def test_record_layout() -> None:
    times = ProcessTimes.from_ticks(10_000_000, 0, 0)

    record = format_time_record(timestamp=TIMESTAMP, label="process tree", command_line="make all", times=times)

    assert record.splitlines() == [
        "2024-05-17 08:30:15",
        "Measured process: process tree",
        "Command: make all",
        "Wall time:\t0h 0min 1sec 0 ms 0 ns",
        "Kernel time:\t0h 0min 0sec 0 ms 0 ns",
        "User time:\t0h 0min 0sec 0 ms 0 ns",
        RECORD_SEPARATOR,
    ]
    assert record.endswith(f"{RECORD_SEPARATOR}\n")


def test_append_never_truncates(tmp_path) -> None:
    log_path = tmp_path / "TimeItLog.txt"
    log_path.write_text("previous run\n", encoding="utf-8")

    for label in ("first", "second"):
        append_time_record(log_path, timestamp=TIMESTAMP, label=label, command_line="cmd", times=ProcessTimes.ZERO)

    content = log_path.read_text(encoding="utf-8")
    assert content.startswith("previous run\n")
    assert content.count(RECORD_SEPARATOR) == 2
    assert content.index("Measured process: first") < content.index("Measured process: second")
