"""Timer duration strings such as ``1h30m15s``."""

from __future__ import annotations

from datetime import timedelta

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from pyclock._constants import SECONDS_PER_HOUR, SECONDS_PER_MINUTE
from pyclock._errors import ERR_MSG_INVALID_DURATION, InvalidDurationFormatError

# A trailing number without a unit is accepted by the grammar and dropped.
_GRAMMAR = r"""
start: segment+ dangling?

segment: NUMBER UNIT
dangling: NUMBER

NUMBER: /[0-9]+/
UNIT: "h" | "m" | "s"
"""

_UNIT_SECONDS = {
    "h": SECONDS_PER_HOUR,
    "m": SECONDS_PER_MINUTE,
    "s": 1,
}


class _DurationTransformer(Transformer):
    def segment(self, children: list[Token]) -> int:
        number, unit = children
        return int(number) * _UNIT_SECONDS[str(unit)]

    def dangling(self, children: list[Token]) -> int:
        return 0

    def start(self, children: list[int]) -> int:
        return sum(children)


_parser = Lark(_GRAMMAR, parser="lalr", transformer=_DurationTransformer())


def parse_duration(text: str) -> timedelta:
    """Parse a compact duration made of ``<digits><h|m|s>`` segments.

    Segments may repeat and are summed. Digits after the last unit are
    ignored.

    Raises:
        InvalidDurationFormatError: On empty input, an unknown unit
            character, a unit without digits, or no unit at all.
    """
    try:
        total: int = _parser.parse(text)
    except LarkError as e:
        raise InvalidDurationFormatError(
            ERR_MSG_INVALID_DURATION,
            f"cannot parse duration {text!r}: {e}",
            wrapped=e,
        ) from e
    try:
        return timedelta(seconds=total)
    except OverflowError as e:
        raise InvalidDurationFormatError(
            ERR_MSG_INVALID_DURATION,
            f"duration {text!r} ({total} seconds) is too large",
            wrapped=e,
        ) from e
