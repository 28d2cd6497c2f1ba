"""Runtime settings read from the environment (and an optional ``.env``)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from pyclock._constants import DEFAULT_STORE_FILE_NAME

ENV_STORE_FILE = "CLOCK_FILE"
ENV_LOG_LEVEL = "CLOCK_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    store_path: Path
    log_level: str = DEFAULT_LOG_LEVEL


def default_store_path() -> Path:
    return Path.home() / DEFAULT_STORE_FILE_NAME


def load_settings(*, use_dotenv: bool = True) -> Settings:
    """Build settings from ``CLOCK_FILE`` and ``CLOCK_LOG_LEVEL``."""
    if use_dotenv:
        load_dotenv()
    store = os.getenv(ENV_STORE_FILE)
    return Settings(
        store_path=Path(store).expanduser() if store else default_store_path(),
        log_level=os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(),
    )
