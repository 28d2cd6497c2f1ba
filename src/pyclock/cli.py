"""The ``clock`` command.

Usage::

    clock                     current time in both units
    clock 1700000000          date and distance of a timestamp (-s / -ms to force a unit)
    clock -t 1h30m            countdown
    clock -c                  count up until Ctrl-C
    clock m                   list markers
    clock m 2                 show marker #2
    clock m shipped v1.2      add a marker now
    clock markers             list markers
    clock clear               remove all markers
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path
from typing import List, Optional

import typer

from pyclock._config import load_settings
from pyclock._duration import parse_duration
from pyclock._errors import ClockError
from pyclock._logging import configure_logging
from pyclock._relative import relative_phrase
from pyclock._units import (
    TimeUnit,
    alternate,
    format_date,
    infer_unit,
    parse_instant,
)
from pyclock.markers import Marker, MarkerStore
from pyclock.storage import FileBackend
from pyclock.timer import count_up, countdown, render_count_up, render_countdown

logger = logging.getLogger(__name__)

app: typer.Typer = typer.Typer(
    name="clock",
    help="Convert Unix timestamps, keep time markers and run timers.",
    add_completion=False,
    pretty_exceptions_enable=False,
)

MARKER_WORD = "m"
MARKERS_WORD = "markers"
CLEAR_WORD = "clear"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _print_block(lines: list[str]) -> None:
    typer.echo()
    for line in lines:
        typer.echo(line)
    typer.echo()


def _timestamp_lines(value: int, unit: TimeUnit) -> list[str]:
    alt_value, alt_unit = alternate(value, unit)
    return [
        f"Timestamp: {value} ({unit.label})",
        f"Timestamp: {alt_value} ({alt_unit.label})",
        f"Date:      {format_date(value, unit)}",
    ]


def show_now(now_ms: int) -> None:
    now_s = now_ms // 1000
    _print_block(
        [
            f"Timestamp: {now_s} ({TimeUnit.SECONDS.label})",
            f"Timestamp: {now_ms} ({TimeUnit.MILLISECONDS.label})",
            f"Date:      {format_date(now_s, TimeUnit.SECONDS)}",
        ]
    )


def show_timestamp(raw: str, explicit: TimeUnit | None, now_ms: int) -> None:
    value = parse_instant(raw)
    unit = infer_unit(value, explicit)
    logger.debug("Reading %d as %s", value, unit.label)
    current = now_ms if unit is TimeUnit.MILLISECONDS else now_ms // 1000
    lines = _timestamp_lines(value, unit)
    lines.append(f"Distance:  {relative_phrase(current, value, unit)}")
    _print_block(lines)


def _marker_line(position: int, marker: Marker, now_s: int) -> str:
    distance = relative_phrase(now_s, marker.timestamp, TimeUnit.SECONDS)
    date = format_date(marker.timestamp, TimeUnit.SECONDS)
    line = f"  #{position:<3} {date}  {distance}"
    if marker.description:
        line += f"  {marker.description}"
    return line


def list_markers(store: MarkerStore, now_ms: int) -> None:
    entries = store.list()
    typer.secho(f"Markers ({len(entries)})", bold=True)
    now_s = now_ms // 1000
    for position, marker in entries:
        typer.echo(_marker_line(position, marker, now_s))


def show_marker(store: MarkerStore, position: int, now_ms: int) -> None:
    marker = store.get(position)
    now_s = now_ms // 1000
    lines = [f"Marker #{position}"]
    lines.extend(_timestamp_lines(marker.timestamp, TimeUnit.SECONDS))
    lines.append(
        f"Distance:  {relative_phrase(now_s, marker.timestamp, TimeUnit.SECONDS)}"
    )
    lines.append(f"Note:      {marker.description}")
    _print_block(lines)


def add_marker(store: MarkerStore, words: list[str], now_ms: int) -> None:
    position = store.add(now_ms // 1000, " ".join(words))
    typer.secho(f"Added marker #{position}", fg=typer.colors.GREEN)


def clear_markers(store: MarkerStore) -> None:
    store.clear()
    typer.secho("Cleared all markers", fg=typer.colors.GREEN)


def _notify(message: str) -> None:
    notify_send = shutil.which("notify-send")
    if notify_send is None:
        typer.echo("\a", nl=False)
        return
    try:
        subprocess.run([notify_send, "clock", message], check=False, timeout=5)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("Notification failed: %s", e)


def run_countdown(text: str) -> None:
    total = parse_duration(text)
    logger.debug("Countdown of %s", total)
    try:
        for remaining in countdown(total):
            typer.echo("\r" + render_countdown(remaining, total), nl=False)
    except KeyboardInterrupt:
        typer.echo()
        raise typer.Exit(code=130)
    typer.echo()
    _notify(f"Timer {text} finished")


def run_count_up() -> None:
    try:
        for elapsed in count_up():
            typer.echo("\r" + render_count_up(elapsed), nl=False)
    except KeyboardInterrupt:
        typer.echo()


def _explicit_unit(seconds: bool, milliseconds: bool) -> TimeUnit | None:
    if seconds and milliseconds:
        raise typer.BadParameter("-s and -ms cannot be used together")
    if seconds:
        return TimeUnit.SECONDS
    if milliseconds:
        return TimeUnit.MILLISECONDS
    return None


def _dispatch(
    words: list[str],
    explicit: TimeUnit | None,
    timer: str | None,
    counting_up: bool,
    store_file: Path | None,
    default_store: Path,
) -> None:
    if timer is not None and counting_up:
        raise typer.BadParameter("-t and -c cannot be used together")
    if (timer is not None or counting_up) and words:
        raise typer.BadParameter(
            f"timers take no other arguments, got {' '.join(words)!r}"
        )
    if timer is not None:
        run_countdown(timer)
        return
    if counting_up:
        run_count_up()
        return

    now_ms = _now_ms()
    if not words:
        show_now(now_ms)
        return

    head, rest = words[0], words[1:]
    if head in (MARKER_WORD, MARKERS_WORD, CLEAR_WORD):
        store = MarkerStore(FileBackend(store_file or default_store))
        if head == CLEAR_WORD:
            clear_markers(store)
        elif head == MARKERS_WORD or not rest:
            list_markers(store, now_ms)
        elif len(rest) == 1 and rest[0].isascii() and rest[0].isdigit():
            show_marker(store, int(rest[0]), now_ms)
        else:
            add_marker(store, rest, now_ms)
        return

    if rest:
        raise typer.BadParameter(f"expected a single timestamp, got {' '.join(words)!r}")
    show_timestamp(head, explicit, now_ms)


@app.command()
def main(
    words: Optional[List[str]] = typer.Argument(
        None,
        help="A timestamp, or 'm [N | text...]', 'markers', 'clear'.",
        show_default=False,
    ),
    seconds: bool = typer.Option(
        False, "--seconds", "-s", help="Read the timestamp as Unix seconds."
    ),
    milliseconds: bool = typer.Option(
        False, "--milliseconds", "-ms", help="Read the timestamp as Unix milliseconds."
    ),
    timer: Optional[str] = typer.Option(
        None, "--timer", "-t", help="Run a countdown, e.g. 1h30m15s.", metavar="DURATION"
    ),
    counting_up: bool = typer.Option(
        False, "--count-up", "-c", help="Count up until interrupted."
    ),
    store_file: Optional[Path] = typer.Option(
        None, "--file", help="Marker file (default: $CLOCK_FILE or ~/clock.toml)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output."),
) -> None:
    """Convert Unix timestamps, keep time markers and run timers."""
    settings = load_settings()
    configure_logging(logging.DEBUG if verbose else settings.log_level)
    explicit = _explicit_unit(seconds, milliseconds)

    try:
        _dispatch(
            words or [],
            explicit,
            timer,
            counting_up,
            store_file,
            settings.store_path,
        )
    except ClockError as e:
        logger.debug("%s: %s", type(e).__name__, e.internal())
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
