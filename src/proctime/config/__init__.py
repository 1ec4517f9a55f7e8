"""Environment-backed configuration helpers and settings."""

from .errors import ConfigurationError
from .runtime import env_bool, env_float, env_str
from .settings import TimerSettings

__all__ = [
    "ConfigurationError",
    "TimerSettings",
    "env_bool",
    "env_float",
    "env_str",
]
