"""pyclock - Unix timestamp conversion, relative time, markers and timers."""

from __future__ import annotations

try:
    from pyclock._version import __version__
except ModuleNotFoundError:  # editable install without VCS metadata
    __version__ = "0.0.0.dev0"

from pyclock._duration import parse_duration
from pyclock._errors import (
    ClockError,
    InvalidDurationFormatError,
    InvalidNumericInputError,
    MarkerNotFoundError,
    StorageError,
    StorageIOError,
    StorageParseError,
)
from pyclock._relative import Direction, RelativeDuration, decompose, relative_phrase
from pyclock._units import TimeUnit, format_date, infer_unit, parse_instant
from pyclock.markers import Marker, MarkerStore
from pyclock.storage import DocumentBackend, FileBackend, MemoryBackend

__all__ = [
    "decompose",
    "format_date",
    "infer_unit",
    "parse_duration",
    "parse_instant",
    "relative_phrase",
    "Direction",
    "RelativeDuration",
    "TimeUnit",
    "Marker",
    "MarkerStore",
    "DocumentBackend",
    "FileBackend",
    "MemoryBackend",
    "ClockError",
    "InvalidDurationFormatError",
    "InvalidNumericInputError",
    "MarkerNotFoundError",
    "StorageError",
    "StorageIOError",
    "StorageParseError",
]
