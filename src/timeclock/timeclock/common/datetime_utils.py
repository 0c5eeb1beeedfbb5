from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_year_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM string into (year, month)."""
    parsed = datetime.strptime(value, "%Y-%m")
    return parsed.year, parsed.month


def now_local() -> datetime:
    """Current local time truncated to whole seconds.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().replace(microsecond=0)


def day_bounds(work_date: date) -> tuple[datetime, datetime]:
    """Half-open [start, end) range covering one calendar day."""
    start = datetime.combine(work_date, time.min)
    return start, start + timedelta(days=1)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month."""
    first = date(year, month, 1)
    if month == 12:
        next_first = date(year + 1, 1, 1)
    else:
        next_first = date(year, month + 1, 1)
    return first, next_first - timedelta(days=1)


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def round_half_up(value: float) -> int:
    """Round .5 upwards (towards +inf) instead of Python's banker's rounding."""
    return int(math.floor(value + 0.5))


def format_minutes(minutes: int) -> str:
    """Render a signed minute balance as +HH:MM / -HH:MM."""
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(int(minutes)), 60)
    return f"{sign}{hours:02d}:{mins:02d}"
