"""Time units, unit inference and date rendering for raw Unix timestamps."""

from __future__ import annotations

import enum
from datetime import datetime, timezone

from pyclock._constants import (
    DATE_FORMAT,
    MILLISECONDS_PER_SECOND,
    YEAR_3000_UNIX_SECONDS,
)
from pyclock._errors import (
    ERR_MSG_DATE_OUT_OF_RANGE,
    ERR_MSG_INVALID_NUMBER,
    InvalidNumericInputError,
)


class TimeUnit(enum.StrEnum):
    SECONDS = "s"
    MILLISECONDS = "ms"

    @property
    def label(self) -> str:
        """Display name used next to a rendered timestamp."""
        if self is TimeUnit.SECONDS:
            return "Unix Sec"
        return "Unix Millisec"

    @property
    def per_second(self) -> int:
        if self is TimeUnit.SECONDS:
            return 1
        return MILLISECONDS_PER_SECOND

    @property
    def other(self) -> TimeUnit:
        if self is TimeUnit.SECONDS:
            return TimeUnit.MILLISECONDS
        return TimeUnit.SECONDS


def infer_unit(raw: int, explicit: TimeUnit | None = None) -> TimeUnit:
    """Pick the unit of a raw timestamp.

    An explicit unit always wins. Otherwise anything that would land past
    the year 3000 when read as seconds is taken to be milliseconds. Large
    values are never rejected.
    """
    if explicit is not None:
        return explicit
    if raw >= YEAR_3000_UNIX_SECONDS:
        return TimeUnit.MILLISECONDS
    return TimeUnit.SECONDS


def parse_instant(text: str) -> int:
    """Parse a non-negative decimal integer argument."""
    if not text or not text.isascii() or not text.isdigit():
        raise InvalidNumericInputError(
            ERR_MSG_INVALID_NUMBER,
            f"cannot parse {text!r} as a non-negative integer",
        )
    return int(text)


def to_seconds(value: int, unit: TimeUnit) -> int:
    """Truncate a timestamp to whole seconds."""
    return value // unit.per_second


def alternate(value: int, unit: TimeUnit) -> tuple[int, TimeUnit]:
    """Return the same instant expressed in the other unit."""
    if unit is TimeUnit.SECONDS:
        return value * MILLISECONDS_PER_SECOND, unit.other
    return value // MILLISECONDS_PER_SECOND, unit.other


def to_datetime(value: int, unit: TimeUnit) -> datetime:
    seconds = to_seconds(value, unit)
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidNumericInputError(
            ERR_MSG_DATE_OUT_OF_RANGE,
            f"{value} ({unit.label}) cannot be represented as a date",
            wrapped=e,
        ) from e


def format_date(value: int, unit: TimeUnit) -> str:
    """Render a timestamp as a UTC date string."""
    return to_datetime(value, unit).strftime(DATE_FORMAT)
