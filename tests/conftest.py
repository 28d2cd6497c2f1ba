"""Shared test fixtures."""

import pytest

from pyclock.markers import MarkerStore
from pyclock.storage import FileBackend, MemoryBackend


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def memory_backend():
    return MemoryBackend()


@pytest.fixture
def memory_store(memory_backend):
    return MarkerStore(memory_backend)


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "clock.toml"


@pytest.fixture
def file_store(store_path):
    return MarkerStore(FileBackend(store_path))
