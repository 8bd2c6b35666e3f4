from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from typing import Iterator


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def day_bounds(work_date: date) -> tuple[datetime, datetime]:
    """Return the first and last second of a calendar day (inclusive)."""
    return datetime.combine(work_date, time(0, 0, 0)), datetime.combine(work_date, time(23, 59, 59))


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, halves rounded up.

    Negative when end precedes start.
    """
    return int(math.floor((end - start).total_seconds() / 60 + 0.5))


def clock_minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def at_clock_time(day: datetime, clock: time) -> datetime:
    """Apply a clock time to the calendar date of ``day`` (seconds zeroed)."""
    return day.replace(hour=clock.hour, minute=clock.minute, second=0, microsecond=0)
