"""Validation and comparison of ``HH:MM:SS`` stop-time strings."""

from __future__ import annotations

from typing import Tuple

from .domain.errors import InvalidTimeError

TimeOfDay = Tuple[int, int, int]


def parse_time(value: str) -> TimeOfDay:
    """Parse ``"H:MM:SS"`` into ``(hours, minutes, seconds)``.

    Whitespace around each field is ignored. Hours must lie in 0-23 and
    minutes and seconds in 0-59, so after-midnight GTFS times such as
    ``"25:10:00"`` are rejected.

    Raises:
        InvalidTimeError: If ``value`` is not a valid time of day.
    """
    fields = value.split(":") if isinstance(value, str) else []
    if len(fields) != 3:
        raise InvalidTimeError(f"Expected HH:MM:SS, got {value!r}", value=str(value))
    try:
        hours, minutes, seconds = (int(f.strip()) for f in fields)
    except ValueError as e:
        raise InvalidTimeError(
            f"Expected HH:MM:SS, got {value!r}", cause=e, value=value
        ) from e
    if not (0 <= hours <= 23 and 0 <= minutes <= 59 and 0 <= seconds <= 59):
        raise InvalidTimeError(f"Time out of range: {value!r}", value=value)
    return hours, minutes, seconds


def is_valid_time(value: str) -> bool:
    try:
        parse_time(value)
    except InvalidTimeError:
        return False
    return True


def times_equal(first: str, second: str) -> bool:
    """Compare two time strings field by field; invalid input is unequal."""
    try:
        return parse_time(first) == parse_time(second)
    except InvalidTimeError:
        return False
