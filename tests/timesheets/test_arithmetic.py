from datetime import datetime, time
from types import SimpleNamespace

import pytest

from timesheet_engine.core.exceptions import ValidationError
from timesheet_engine.shifts.model import ShiftTemplate
from timesheet_engine.timesheets import arithmetic
from timesheet_engine.timesheets.arithmetic import TimeRules


def test_night_window_wraps_past_midnight():
    rules = TimeRules()
    minutes = arithmetic.night_minutes(datetime(2024, 1, 1, 22, 0), datetime(2024, 1, 2, 2, 0), rules)
    assert minutes == 240


def test_night_minutes_counts_only_window_hours():
    rules = TimeRules()
    # 20:00-22:00 -> only 21:00-22:00 is night
    assert arithmetic.night_minutes(datetime(2024, 1, 1, 20, 0), datetime(2024, 1, 1, 22, 0), rules) == 60
    # 05:30-07:00 -> 05:30-06:00 is night
    assert arithmetic.night_minutes(datetime(2024, 1, 1, 5, 30), datetime(2024, 1, 1, 7, 0), rules) == 30
    assert arithmetic.night_minutes(datetime(2024, 1, 1, 8, 0), datetime(2024, 1, 1, 17, 0), rules) == 0


def test_night_minutes_rejects_intervals_over_the_limit():
    rules = TimeRules(max_interval_minutes=60)
    with pytest.raises(ValidationError):
        arithmetic.night_minutes(datetime(2024, 1, 1, 22, 0), datetime(2024, 1, 1, 23, 30), rules)


@pytest.mark.parametrize(
    "net, scheduled, expected",
    [(510, 480, 30), (480, 480, 0), (300, 480, 0), (0, 0, 0), (-10, 0, 0)],
)
def test_overtime_never_negative(net, scheduled, expected):
    assert arithmetic.overtime_minutes(net, scheduled) == expected


def test_pair_breaks_sums_matched_pairs(event):
    events = [
        event("E1", "break_start", "2024-01-01T12:00"),
        event("E1", "break_end", "2024-01-01T12:30"),
        event("E1", "break_start", "2024-01-01T15:00"),
        event("E1", "break_end", "2024-01-01T15:10"),
    ]
    assert arithmetic.pair_breaks(events) == 40


@pytest.mark.parametrize("n_starts, n_ends", [(3, 1), (1, 3), (2, 2), (0, 2)])
def test_pair_breaks_uses_min_of_starts_and_ends(event, n_starts, n_ends):
    starts = [event("E1", "break_start", f"2024-01-01T1{i}:00") for i in range(n_starts)]
    ends = [event("E1", "break_end", f"2024-01-01T1{i}:15") for i in range(n_ends)]

    # Interleaving order in the input does not matter once sorted.
    assert arithmetic.pair_breaks(list(reversed(ends)) + starts) == 15 * min(n_starts, n_ends)


def test_pair_breaks_ignores_pairs_ending_before_start(event):
    events = [
        event("E1", "break_end", "2024-01-01T11:00"),
        event("E1", "break_start", "2024-01-01T12:00"),
    ]
    assert arithmetic.pair_breaks(events) == 0


def test_late_and_early_departure_use_event_date():
    assert arithmetic.late_minutes(datetime(2024, 1, 1, 8, 2), time(8, 0)) == 2
    assert arithmetic.late_minutes(datetime(2024, 1, 1, 7, 50), time(8, 0)) == 0
    assert arithmetic.early_departure_minutes(datetime(2024, 1, 1, 16, 30), time(17, 0)) == 30
    assert arithmetic.early_departure_minutes(datetime(2024, 1, 1, 17, 5), time(17, 0)) == 0


def test_scheduled_minutes_from_template():
    rules = TimeRules()
    day = ShiftTemplate(start_time=time(8, 0), end_time=time(17, 0), break_minutes=30)
    night = ShiftTemplate(start_time=time(22, 0), end_time=time(6, 0), break_minutes=60, is_night_shift=True)

    assert arithmetic.scheduled_minutes_from_template(day, rules) == 510
    assert arithmetic.scheduled_minutes_from_template(night, rules) == 420
    assert arithmetic.scheduled_minutes_from_template(None, rules) == 480


def test_daily_scheduled_minutes_assumes_six_day_week():
    rules = TimeRules()
    assert arithmetic.daily_scheduled_minutes(48, rules) == 480
    assert arithmetic.daily_scheduled_minutes(40, rules) == 400
    assert arithmetic.daily_scheduled_minutes(45, rules) == 450
    assert arithmetic.daily_scheduled_minutes(None, rules) == 480


def test_rules_reject_invalid_hours():
    with pytest.raises(ValidationError):
        TimeRules(night_start_hour=24)


def test_rules_from_settings_reads_overrides():
    settings = SimpleNamespace(NIGHT_START_HOUR=22, LATE_THRESHOLD_MINUTES=5)
    rules = arithmetic.rules_from_settings(settings)

    assert rules.night_start_hour == 22
    assert rules.late_threshold_minutes == 5
    assert rules.standard_daily_minutes == 480
