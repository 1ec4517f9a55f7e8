"""Tests for TimerSettings."""

from __future__ import annotations

from pathlib import Path

import pytest

from proctime.config import ConfigurationError, TimerSettings

_ENV_NAMES = (
    "PROCTIME_LOG_FILE",
    "PROCTIME_POLL_INTERVAL_SECONDS",
    "PROCTIME_INCLUDE_ROOT",
    "PROCTIME_DEBUG",
    "PROCTIME_NO_COLOR",
    "NO_COLOR",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = TimerSettings.from_env()

    assert settings == TimerSettings()
    assert settings.log_file_name == "TimeItLog.txt"
    assert settings.include_root is True
    assert settings.use_color is True


def test_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("PROCTIME_LOG_FILE", "times.log")
    monkeypatch.setenv("PROCTIME_POLL_INTERVAL_SECONDS", "0.5")
    monkeypatch.setenv("PROCTIME_INCLUDE_ROOT", "false")
    monkeypatch.setenv("PROCTIME_DEBUG", "1")

    settings = TimerSettings.from_env()

    assert settings.log_file_name == "times.log"
    assert settings.poll_interval_seconds == 0.5
    assert settings.include_root is False
    assert settings.debug is True


def test_no_color_convention(monkeypatch) -> None:
    monkeypatch.setenv("NO_COLOR", "")

    assert TimerSettings.from_env().use_color is True

    monkeypatch.setenv("NO_COLOR", "1")

    assert TimerSettings.from_env().use_color is False


@pytest.mark.parametrize("interval", ["0", "-1", "nan"])
def test_rejects_non_positive_poll_interval(monkeypatch, interval) -> None:
    monkeypatch.setenv("PROCTIME_POLL_INTERVAL_SECONDS", interval)

    with pytest.raises(ConfigurationError):
        TimerSettings.from_env()


def test_log_file_path_is_relative_to_working_directory(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert TimerSettings().log_file_path() == Path.cwd() / "TimeItLog.txt"
    assert TimerSettings().log_file_path(Path("/data")) == Path("/data") / "TimeItLog.txt"
