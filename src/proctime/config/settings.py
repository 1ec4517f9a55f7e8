"""Settings for a timed run, read from the environment."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError
from .runtime import env_bool, env_float, env_str

DEFAULT_LOG_FILE_NAME = "TimeItLog.txt"
DEFAULT_POLL_INTERVAL_SECONDS = 0.05


@dataclass(frozen=True)
class TimerSettings:
    """Runtime knobs that are not exposed as command line flags."""

    log_file_name: str = DEFAULT_LOG_FILE_NAME
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    include_root: bool = True
    debug: bool = False
    use_color: bool = True

    def __post_init__(self) -> None:
        if not self.log_file_name.strip():
            raise ConfigurationError.missing_value("log_file_name")
        if not math.isfinite(self.poll_interval_seconds) or self.poll_interval_seconds <= 0:
            raise ConfigurationError.invalid_value(
                "poll_interval_seconds",
                self.poll_interval_seconds,
                "Must be a positive number of seconds",
            )

    @classmethod
    def from_env(cls) -> TimerSettings:
        """
        Build settings from ``PROCTIME_*`` environment variables.

        Raises:
            ConfigurationError: If a variable holds a malformed value
        """
        no_color = bool(env_bool("PROCTIME_NO_COLOR", or_value=False)) or env_str("NO_COLOR") is not None
        return cls(
            log_file_name=env_str("PROCTIME_LOG_FILE", or_value=DEFAULT_LOG_FILE_NAME),
            poll_interval_seconds=env_float("PROCTIME_POLL_INTERVAL_SECONDS", or_value=DEFAULT_POLL_INTERVAL_SECONDS),
            include_root=bool(env_bool("PROCTIME_INCLUDE_ROOT", or_value=True)),
            debug=bool(env_bool("PROCTIME_DEBUG", or_value=False)),
            use_color=not no_color,
        )

    def log_file_path(self, working_directory: Path | None = None) -> Path:
        """Location of the time log, relative to the current working directory."""
        base = working_directory if working_directory is not None else Path.cwd()
        return base / self.log_file_name


__all__ = ["DEFAULT_LOG_FILE_NAME", "DEFAULT_POLL_INTERVAL_SECONDS", "TimerSettings"]
