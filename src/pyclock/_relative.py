"""Relative-time phrases such as "1 day, 2 hours ago".

The decomposition is greedy and deliberately not calendar exact: a year and
a month are fixed spans, and the remainder after each step is taken with a
slightly different constant than the divisor. Output depends on those exact
constants, so they live in :mod:`pyclock._constants` unchanged.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from pyclock._constants import (
    MONTH_DIVISOR,
    MONTH_MODULUS,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    YEAR_DIVISOR,
    YEAR_MODULUS,
)
from pyclock._units import TimeUnit, to_seconds


class Direction(enum.Enum):
    PAST = "ago"
    FUTURE = "from now"

    @property
    def suffix(self) -> str:
        return self.value


_COMPONENTS = ("year", "month", "day", "hour", "minute", "second")


@dataclass(frozen=True)
class RelativeDuration:
    """Distance between two instants, split into display components."""

    years: int
    months: int
    days: int
    hours: int
    minutes: int
    seconds: int
    direction: Direction

    def clauses(self) -> list[str]:
        values = (
            self.years,
            self.months,
            self.days,
            self.hours,
            self.minutes,
            self.seconds,
        )
        return [
            f"{value} {name}{'s' if value > 1 else ''}"
            for name, value in zip(_COMPONENTS, values)
            if value > 0
        ]

    def phrase(self) -> str:
        """Join non-zero components and append the direction suffix.

        With no non-zero component only the suffix is returned.
        """
        clauses = self.clauses()
        if not clauses:
            return self.direction.suffix
        return f"{', '.join(clauses)} {self.direction.suffix}"


def decompose(current: int, against: int, unit: TimeUnit) -> RelativeDuration:
    """Split the distance from ``current`` to ``against`` into components.

    ``against`` before ``current`` is PAST; equal or later is FUTURE.
    """
    current = to_seconds(current, unit)
    against = to_seconds(against, unit)

    direction = Direction.PAST if current > against else Direction.FUTURE
    diff = abs(current - against)

    years = diff // YEAR_DIVISOR
    diff %= YEAR_MODULUS
    months = diff // MONTH_DIVISOR
    diff %= MONTH_MODULUS
    days = diff // SECONDS_PER_DAY
    diff %= SECONDS_PER_DAY
    hours = diff // SECONDS_PER_HOUR
    diff %= SECONDS_PER_HOUR
    minutes = diff // SECONDS_PER_MINUTE
    seconds = diff % SECONDS_PER_MINUTE

    return RelativeDuration(
        years=years,
        months=months,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        direction=direction,
    )


def relative_phrase(current: int, against: int, unit: TimeUnit) -> str:
    """Describe ``against`` relative to ``current``.

    Example: ``relative_phrase(now, now - 90061, TimeUnit.SECONDS)`` returns
    ``"1 day, 1 hour, 1 minute, 1 second ago"``.
    """
    return decompose(current, against, unit).phrase()
