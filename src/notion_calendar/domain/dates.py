"""Calendar date, clock time and weekday helpers.

Notion stores a date value as an ISO string that is either a bare calendar
date (``2024-02-29``) or a date followed by a time suffix
(``2024-02-29T09:00:00.000+09:00``). Everything here works on the first ten
characters as the calendar date and treats the rest as an opaque suffix.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Iterable, Optional, Tuple

# Sunday-first, matching the 0=Sunday..6=Saturday numbering used by the widget.
WEEKDAY_TOKENS: Tuple[str, ...] = ("일", "월", "화", "수", "목", "금", "토")

_CLOCK_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def parse_day(value: str) -> date:
    if len(value) != 10:
        raise ValueError(f"date must be formatted YYYY-MM-DD: {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"date must be formatted YYYY-MM-DD: {value!r}") from exc


def validate_clock(value: str) -> str:
    if not _CLOCK_PATTERN.match(value):
        raise ValueError(f"time must be formatted HH:MM: {value!r}")
    return value


def split_timestamp(value: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Split a Notion timestamp into ``(YYYY-MM-DD, HH:MM)``; the clock may be ``None``."""

    if not value:
        return None, None
    day = value[:10]
    clock = value[11:16] if len(value) > 10 else ""
    return day, clock or None


def combine_timestamp(day: str, clock: Optional[str] = None) -> str:
    return f"{day}T{clock}" if clock else day


def shift_timestamp(value: str, days: int = 1) -> str:
    shifted = parse_day(value[:10]) + timedelta(days=days)
    return shifted.isoformat() + value[10:]


def weekday_number(day: date) -> int:
    return (day.weekday() + 1) % 7


def format_repeat_days(days: Iterable[int]) -> list[str]:
    numbers = sorted(set(days))
    for number in numbers:
        if not 0 <= number <= 6:
            raise ValueError(f"weekday must be between 0 (Sunday) and 6 (Saturday): {number}")
    return [WEEKDAY_TOKENS[number] for number in numbers]


def parse_repeat_days(tokens: Iterable[str]) -> list[int]:
    numbers = {WEEKDAY_TOKENS.index(token) for token in tokens if token in WEEKDAY_TOKENS}
    return sorted(numbers)


def display_date(
    stored: Optional[str],
    *,
    is_routine: bool,
    repeat_days: Iterable[int],
    today: date,
) -> Optional[str]:
    """Return the date a widget should show for an entry.

    A routine whose repeat days include today's weekday is shown on today.
    """

    if is_routine and weekday_number(today) in set(repeat_days):
        return today.isoformat()
    return stored
