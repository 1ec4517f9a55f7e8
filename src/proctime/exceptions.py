"""Exception classes for proctime.

All custom exceptions inherit from ApplicationError to keep a consistent
hierarchy across the package.

Exception classes support two patterns:
1. No-argument raise: raise MeasurementError()
2. Contextual attributes: err = MeasurementError(pid=123); raise err
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all proctime errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "Application error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class InvalidArgumentError(ApplicationError, ValueError):
    """Argument is outside the accepted domain."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Argument is outside the accepted domain"
        super().__init__(message, **kwargs)


class DurationOverflowError(ApplicationError, OverflowError):
    """Duration exceeds the representable tick range."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Duration exceeds the representable tick range"
        super().__init__(message, **kwargs)


class MeasurementError(ApplicationError):
    """Execution times of a process could not be queried."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Execution times of a process could not be queried"
        super().__init__(message, **kwargs)


class ProcessVanishedError(ApplicationError):
    """Process exited before it could be resolved."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Process exited before it could be resolved"
        super().__init__(message, **kwargs)


class UsageError(ApplicationError):
    """Command line arguments are invalid."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Command line arguments are invalid"
        super().__init__(message, **kwargs)


__all__ = [
    "ApplicationError",
    "DurationOverflowError",
    "InvalidArgumentError",
    "MeasurementError",
    "ProcessVanishedError",
    "UsageError",
]
