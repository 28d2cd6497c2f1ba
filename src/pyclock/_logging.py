"""Console logging setup for the ``clock`` command.

Library modules only call :func:`logging.getLogger`; handlers are attached
here, once, by the CLI.
"""

from __future__ import annotations

import logging

_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_handler: logging.Handler | None = None


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Attach a stderr handler to the ``pyclock`` logger. Idempotent."""
    global _handler
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.WARNING

    logger = logging.getLogger("pyclock")
    logger.setLevel(level)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(_handler)
    _handler.setLevel(level)
