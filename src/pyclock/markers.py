"""Ordered list of timestamped text markers kept in a TOML document.

Every operation loads the whole document, works on it in memory and, for
mutations, saves the whole document back. Markers have no stored id: the
1-based position in the ``events`` array is their identity.

File layout::

    events = [
        {timestamp = 1700000000, description = "deploy"},
    ]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.items import AoT, Array

from pyclock._constants import EVENTS_KEY, TOML_MAX_INTEGER
from pyclock._errors import (
    ERR_MSG_INVALID_NUMBER,
    ERR_MSG_MARKER_NOT_FOUND,
    ERR_MSG_STORAGE_PARSE,
    InvalidNumericInputError,
    MarkerNotFoundError,
    StorageParseError,
)
from pyclock.storage import DocumentBackend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Marker:
    """A point in time (whole seconds) with a free-text note."""

    timestamp: int
    description: str = ""


def _empty_events() -> Array:
    return tomlkit.array().multiline(True)


def _record_to_marker(index: int, record: Any) -> Marker:
    if not isinstance(record, dict):
        raise StorageParseError(
            ERR_MSG_STORAGE_PARSE,
            f"{EVENTS_KEY}[{index}] is not a table",
        )
    timestamp = record.get("timestamp")
    description = record.get("description", "")
    if not isinstance(timestamp, int) or isinstance(timestamp, bool) or timestamp < 0:
        raise StorageParseError(
            ERR_MSG_STORAGE_PARSE,
            f"{EVENTS_KEY}[{index}].timestamp must be a non-negative integer, "
            f"got {timestamp!r}",
        )
    if not isinstance(description, str):
        raise StorageParseError(
            ERR_MSG_STORAGE_PARSE,
            f"{EVENTS_KEY}[{index}].description must be a string, got {description!r}",
        )
    return Marker(timestamp=int(timestamp), description=str(description))


class MarkerStore:
    """CRUD over the marker document held by a backend."""

    def __init__(self, backend: DocumentBackend) -> None:
        self._backend = backend

    def _events(self, doc: TOMLDocument) -> list[Any]:
        events = doc.get(EVENTS_KEY)
        if events is None:
            return []
        if not isinstance(events, (Array, AoT)):
            raise StorageParseError(
                ERR_MSG_STORAGE_PARSE,
                f"{EVENTS_KEY} must be an array, got {type(events).__name__}",
            )
        return events

    def _read(self) -> tuple[TOMLDocument, list[Marker]]:
        doc = self._backend.load()
        markers = [
            _record_to_marker(i, record)
            for i, record in enumerate(self._events(doc))
        ]
        return doc, markers

    def list(self) -> list[tuple[int, Marker]]:
        """Return every marker with its 1-based position."""
        _, markers = self._read()
        return list(enumerate(markers, start=1))

    def count(self) -> int:
        _, markers = self._read()
        return len(markers)

    def get(self, position: int) -> Marker:
        """Return the marker at a 1-based position.

        Raises:
            MarkerNotFoundError: If ``position`` is not in ``[1, count]``.
        """
        _, markers = self._read()
        if position < 1 or position > len(markers):
            raise MarkerNotFoundError(
                ERR_MSG_MARKER_NOT_FOUND,
                f"position {position} is outside 1..{len(markers)}",
            )
        return markers[position - 1]

    def add(self, timestamp: int, description: str = "") -> int:
        """Append a marker and return its position."""
        if isinstance(timestamp, bool) or not 0 <= timestamp <= TOML_MAX_INTEGER:
            raise InvalidNumericInputError(
                ERR_MSG_INVALID_NUMBER,
                f"marker timestamp must be an integer in 0..{TOML_MAX_INTEGER}, "
                f"got {timestamp!r}",
            )
        doc, markers = self._read()
        events = doc.get(EVENTS_KEY)
        if events is None:
            events = _empty_events()
            doc[EVENTS_KEY] = events

        if isinstance(events, AoT):
            events.append({"timestamp": timestamp, "description": description})
        else:
            # a cleared or hand-written "[]" parses back as single-line
            if not events:
                events.multiline(True)
            record = tomlkit.inline_table()
            record.append("timestamp", timestamp)
            record.append("description", description)
            events.append(record)

        self._backend.save(doc)
        position = len(markers) + 1
        logger.debug("Added marker %d at %d", position, timestamp)
        return position

    def clear(self) -> None:
        """Remove every marker, keeping the document and its ``events`` key."""
        doc, markers = self._read()
        doc[EVENTS_KEY] = _empty_events()
        self._backend.save(doc)
        logger.debug("Cleared %d markers", len(markers))
