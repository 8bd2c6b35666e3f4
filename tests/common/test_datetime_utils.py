from __future__ import annotations

from datetime import date, datetime

import pytest

from timesheet_engine.common.datetime_utils import day_bounds, iter_dates, minutes_between, parse_iso_date


def test_parse_iso_date():
    assert parse_iso_date("2024-01-31") == date(2024, 1, 31)
    with pytest.raises(ValueError):
        parse_iso_date("31/01/2024")


@pytest.mark.parametrize(
    "end, expected",
    [
        ("2024-01-01T08:00:29", 0),
        ("2024-01-01T08:00:30", 1),
        ("2024-01-01T17:05:00", 545),
        ("2024-01-01T07:59:00", -1),
    ],
)
def test_minutes_between_rounds_half_up(end, expected):
    assert minutes_between(datetime(2024, 1, 1, 8, 0), datetime.fromisoformat(end)) == expected


def test_day_bounds_and_iter_dates():
    assert day_bounds(date(2024, 1, 1)) == (datetime(2024, 1, 1, 0, 0, 0), datetime(2024, 1, 1, 23, 59, 59))
    assert list(iter_dates(date(2024, 2, 28), date(2024, 3, 1))) == [
        date(2024, 2, 28),
        date(2024, 2, 29),
        date(2024, 3, 1),
    ]
    assert list(iter_dates(date(2024, 1, 2), date(2024, 1, 1))) == []
