"""Backends holding the marker document.

The marker store never touches paths itself; it is handed a backend that
loads and saves a whole :class:`tomlkit.TOMLDocument`. Parsing and dumping go
through tomlkit so an unmodified document serializes back byte for byte.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.exceptions import TOMLKitError

from pyclock._errors import (
    ERR_MSG_STORAGE_CREATE,
    ERR_MSG_STORAGE_PARSE,
    ERR_MSG_STORAGE_READ,
    ERR_MSG_STORAGE_WRITE,
    StorageIOError,
    StorageParseError,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class DocumentBackend(Protocol):
    """Minimal load/save protocol for the marker document."""

    def load(self) -> TOMLDocument: ...

    def save(self, doc: TOMLDocument) -> None: ...


def parse_document(text: str, source: str = "<memory>") -> TOMLDocument:
    """Parse TOML text, mapping tomlkit failures to StorageParseError."""
    try:
        return tomlkit.parse(text)
    except TOMLKitError as e:
        raise StorageParseError(
            ERR_MSG_STORAGE_PARSE,
            f"{source}: {e}",
            wrapped=e,
        ) from e


class MemoryBackend:
    """Keeps the serialized document in memory."""

    def __init__(self, text: str = "") -> None:
        self.text = text

    def load(self) -> TOMLDocument:
        return parse_document(self.text)

    def save(self, doc: TOMLDocument) -> None:
        self.text = tomlkit.dumps(doc)


class FileBackend:
    """Stores the document in a single TOML file.

    A missing file is created empty on first access. Saving writes a
    temporary file next to the target and renames it into place, so the
    previous content survives a failed write.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"FileBackend({str(self.path)!r})"

    def _ensure_exists(self) -> None:
        if self.path.exists():
            return
        try:
            self.path.touch(exist_ok=True)
        except OSError as e:
            raise StorageIOError(
                ERR_MSG_STORAGE_CREATE,
                f"creating {self.path}: {e}",
                wrapped=e,
            ) from e
        logger.info("Created %s", self.path)

    def load(self) -> TOMLDocument:
        self._ensure_exists()
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise StorageIOError(
                ERR_MSG_STORAGE_READ,
                f"reading {self.path}: {e}",
                wrapped=e,
            ) from e
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise StorageParseError(
                ERR_MSG_STORAGE_PARSE,
                f"{self.path} is not valid UTF-8: {e}",
                wrapped=e,
            ) from e
        return parse_document(text, source=str(self.path))

    def save(self, doc: TOMLDocument) -> None:
        text = tomlkit.dumps(doc)
        tmp: str | None = None
        try:
            fd, tmp = tempfile.mkstemp(
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                dir=self.path.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            if self.path.exists():
                os.chmod(tmp, stat.S_IMODE(self.path.stat().st_mode))
            os.replace(tmp, self.path)
        except OSError as e:
            if tmp is not None and os.path.exists(tmp):
                os.unlink(tmp)
            raise StorageIOError(
                ERR_MSG_STORAGE_WRITE,
                f"writing {self.path}: {e}",
                wrapped=e,
            ) from e
        logger.info("Updated %s", self.path)
