"""
High precision duration value.

A PreciseDuration stores a non-negative count of 100 ns ticks and exposes an
hours/minutes/seconds/milliseconds/nanoseconds decomposition of it. All
arithmetic is done on integers so the decomposition is exact for every tick
count up to MAX_TICKS.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import ClassVar, Union

from .exceptions import DurationOverflowError, InvalidArgumentError

NANOSECONDS_PER_TICK = 100
TICKS_PER_MICROSECOND = 10
TICKS_PER_SECOND = 10_000_000
MAX_TICKS = 2**63 - 1

_NS_PER_MILLISECOND = 1_000_000
_NS_PER_SECOND = 1_000 * _NS_PER_MILLISECOND
_NS_PER_MINUTE = 60 * _NS_PER_SECOND
_NS_PER_HOUR = 60 * _NS_PER_MINUTE

DurationOperand = Union[int, "PreciseDuration", timedelta]


def ticks_from_seconds(seconds: float) -> int:
    """Convert an OS-reported number of seconds to whole ticks.

    The float is routed through its shortest decimal representation so that
    values such as ``0.1`` become exactly one million ticks.
    """
    try:
        exact = Decimal(repr(seconds))
    except InvalidOperation as exc:
        raise InvalidArgumentError(f"Seconds value {seconds!r} is not numeric", value=seconds) from exc
    if not exact.is_finite():
        raise InvalidArgumentError(f"Seconds value {seconds!r} is not finite", value=seconds)
    return int((exact * TICKS_PER_SECOND).to_integral_value())


def ticks_from_timedelta(value: timedelta) -> int:
    """Exact tick count of a timedelta (which has microsecond resolution)."""
    whole_seconds = value.days * 86_400 + value.seconds
    return whole_seconds * TICKS_PER_SECOND + value.microseconds * TICKS_PER_MICROSECOND


def _validate_ticks(ticks: int) -> int:
    if isinstance(ticks, bool) or not isinstance(ticks, int):
        raise InvalidArgumentError(f"Ticks must be an integer, got {type(ticks).__name__}", ticks=ticks)
    if ticks < 0:
        raise InvalidArgumentError("Ticks must be positive value.", ticks=ticks)
    if ticks > MAX_TICKS:
        raise DurationOverflowError("Too big timespan.", ticks=ticks)
    return ticks


def _operand_ticks(other: object) -> int | None:
    if isinstance(other, PreciseDuration):
        return other.ticks
    if isinstance(other, timedelta):
        ticks = ticks_from_timedelta(other)
    elif isinstance(other, int) and not isinstance(other, bool):
        ticks = other
    else:
        return None
    if ticks < 0:
        raise InvalidArgumentError("Duration operand must not be negative.", ticks=ticks)
    return ticks


@dataclass(frozen=True, order=True)
class PreciseDuration:
    """Immutable duration counted in 100 ns ticks."""

    ticks: int

    ZERO: ClassVar[PreciseDuration]

    def __post_init__(self) -> None:
        _validate_ticks(self.ticks)

    @classmethod
    def from_ticks(cls, ticks: int) -> PreciseDuration:
        """Construct a duration from 100 ns ticks.

        Raises:
            InvalidArgumentError: For negative or non-integer ticks.
            DurationOverflowError: For ticks above MAX_TICKS.
        """
        return cls(_validate_ticks(ticks))

    @classmethod
    def from_timedelta(cls, value: timedelta) -> PreciseDuration:
        return cls.from_ticks(ticks_from_timedelta(value))

    def _decompose(self) -> tuple[int, int, int, int, int]:
        total_nanoseconds = self.ticks * NANOSECONDS_PER_TICK
        hours, remainder = divmod(total_nanoseconds, _NS_PER_HOUR)
        minutes, remainder = divmod(remainder, _NS_PER_MINUTE)
        seconds, remainder = divmod(remainder, _NS_PER_SECOND)
        milliseconds, nanoseconds = divmod(remainder, _NS_PER_MILLISECOND)
        return hours, minutes, seconds, milliseconds, nanoseconds

    @property
    def hours(self) -> int:
        return self._decompose()[0]

    @property
    def minutes(self) -> int:
        return self._decompose()[1]

    @property
    def seconds(self) -> int:
        return self._decompose()[2]

    @property
    def milliseconds(self) -> int:
        return self._decompose()[3]

    @property
    def nanoseconds(self) -> int:
        return self._decompose()[4]

    def to_timedelta(self) -> timedelta:
        """Convert to ``timedelta``, truncating below microsecond resolution."""
        return timedelta(microseconds=self.ticks // TICKS_PER_MICROSECOND)

    def format(self) -> str:
        hours, minutes, seconds, milliseconds, nanoseconds = self._decompose()
        return f"{hours}h {minutes}min {seconds}sec {milliseconds} ms {nanoseconds} ns"

    def __str__(self) -> str:
        return self.format()

    def __add__(self, other: DurationOperand) -> PreciseDuration:
        ticks = _operand_ticks(other)
        if ticks is None:
            return NotImplemented
        total = self.ticks + ticks
        if total > MAX_TICKS:
            raise DurationOverflowError("Too big timespan.", ticks=total)
        return PreciseDuration.from_ticks(total)

    __radd__ = __add__

    def __sub__(self, other: DurationOperand) -> PreciseDuration:
        ticks = _operand_ticks(other)
        if ticks is None:
            return NotImplemented
        total = self.ticks - ticks
        if total < 0:
            raise InvalidArgumentError("Total ticks are negative.", ticks=total)
        return PreciseDuration.from_ticks(total)


PreciseDuration.ZERO = PreciseDuration(0)


__all__ = [
    "MAX_TICKS",
    "NANOSECONDS_PER_TICK",
    "PreciseDuration",
    "TICKS_PER_SECOND",
    "ticks_from_seconds",
    "ticks_from_timedelta",
]
