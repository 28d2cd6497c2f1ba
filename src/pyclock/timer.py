"""Countdown and count-up loops.

Both loops are generators that sleep one tick between frames and yield the
current reading, leaving rendering to the caller. They stop only when the
countdown reaches zero or the consumer stops iterating (Ctrl-C in the CLI).
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Iterator
from datetime import timedelta

from pyclock._constants import (
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    TIMER_TICK_SECONDS,
)

Clock = Callable[[], float]
Sleep = Callable[[float], None]


def countdown(
    total: timedelta,
    *,
    tick: float = TIMER_TICK_SECONDS,
    clock: Clock = time.monotonic,
    sleep: Sleep = time.sleep,
) -> Iterator[timedelta]:
    """Yield the remaining time every ``tick`` seconds, ending with zero."""
    deadline = clock() + total.total_seconds()
    while True:
        remaining = deadline - clock()
        if remaining <= 0:
            yield timedelta(0)
            return
        yield timedelta(seconds=remaining)
        sleep(tick)


def count_up(
    *,
    tick: float = TIMER_TICK_SECONDS,
    clock: Clock = time.monotonic,
    sleep: Sleep = time.sleep,
) -> Iterator[timedelta]:
    """Yield the elapsed time every ``tick`` seconds, forever."""
    start = clock()
    while True:
        yield timedelta(seconds=clock() - start)
        sleep(tick)


def format_clock(delta: timedelta) -> str:
    """Render a non-negative duration as ``HH:MM:SS``; hours may exceed 99."""
    total = max(int(delta.total_seconds()), 0)
    hours, rest = divmod(total, SECONDS_PER_HOUR)
    minutes, seconds = divmod(rest, SECONDS_PER_MINUTE)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def render_countdown(remaining: timedelta, total: timedelta, width: int = 30) -> str:
    if total <= timedelta(0):
        done = 1.0
    else:
        done = 1.0 - remaining / total
        done = min(max(done, 0.0), 1.0)
    filled = int(round(done * width))
    bar = "#" * filled + "-" * (width - filled)
    # Remaining time is rounded up to whole seconds.
    shown = timedelta(seconds=math.ceil(remaining.total_seconds()))
    return f"{format_clock(shown)} [{bar}] {int(done * 100):3d}%"


def render_count_up(elapsed: timedelta) -> str:
    return format_clock(elapsed)
