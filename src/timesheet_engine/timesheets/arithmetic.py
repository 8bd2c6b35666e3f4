"""Minute arithmetic used to build timesheets.

Every function is pure; configuration is passed in as an immutable
:class:`TimeRules` value instead of living on a service instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional, Sequence

from ..attendance.grouping import events_of_type
from ..attendance.model import AttendanceEvent
from ..common.datetime_utils import at_clock_time, clock_minutes, minutes_between
from ..common.validators import require_hour, require_positive
from ..core import constants
from ..core.enums import EventType
from ..core.exceptions import ValidationError
from ..shifts.model import ShiftTemplate


@dataclass(frozen=True)
class TimeRules:
    standard_daily_minutes: int = constants.DEFAULT_STANDARD_DAILY_MINUTES
    night_start_hour: int = constants.DEFAULT_NIGHT_START_HOUR
    night_end_hour: int = constants.DEFAULT_NIGHT_END_HOUR
    late_threshold_minutes: int = constants.DEFAULT_LATE_THRESHOLD_MINUTES
    max_interval_minutes: int = constants.DEFAULT_MAX_INTERVAL_MINUTES
    working_days_per_week: int = constants.DEFAULT_WORKING_DAYS_PER_WEEK
    default_work_hours_per_week: float = constants.DEFAULT_WORK_HOURS_PER_WEEK

    def __post_init__(self) -> None:
        require_hour(self.night_start_hour, "night_start_hour")
        require_hour(self.night_end_hour, "night_end_hour")
        require_positive(self.max_interval_minutes, "max_interval_minutes")
        require_positive(self.working_days_per_week, "working_days_per_week")

    def is_night_hour(self, hour: int) -> bool:
        # OR, not AND: the window wraps past midnight (e.g. 21:00-06:00).
        return hour >= self.night_start_hour or hour < self.night_end_hour


def rules_from_settings(settings) -> TimeRules:
    """Build TimeRules from a settings module, falling back to the defaults."""

    defaults = TimeRules()
    return TimeRules(
        standard_daily_minutes=int(getattr(settings, "STANDARD_DAILY_MINUTES", defaults.standard_daily_minutes)),
        night_start_hour=int(getattr(settings, "NIGHT_START_HOUR", defaults.night_start_hour)),
        night_end_hour=int(getattr(settings, "NIGHT_END_HOUR", defaults.night_end_hour)),
        late_threshold_minutes=int(getattr(settings, "LATE_THRESHOLD_MINUTES", defaults.late_threshold_minutes)),
        max_interval_minutes=int(getattr(settings, "MAX_INTERVAL_MINUTES", defaults.max_interval_minutes)),
        working_days_per_week=int(getattr(settings, "WORKING_DAYS_PER_WEEK", defaults.working_days_per_week)),
        default_work_hours_per_week=float(
            getattr(settings, "DEFAULT_WORK_HOURS_PER_WEEK", defaults.default_work_hours_per_week)
        ),
    )


def pair_breaks(events: Sequence[AttendanceEvent]) -> int:
    """Total break minutes.

    break_start and break_end events are sorted independently and zipped by
    position, so only ``min(len(starts), len(ends))`` pairs count. A pair whose
    end does not follow its start contributes nothing.
    """

    starts = events_of_type(events, EventType.BREAK_START)
    ends = events_of_type(events, EventType.BREAK_END)

    total = 0
    for start, end in zip(starts, ends):
        total += max(0, minutes_between(start.event_at, end.event_at))
    return total


def night_minutes(check_in: datetime, check_out: datetime, rules: TimeRules) -> int:
    """Count the minutes of [check_in, check_out) whose clock hour is in the night window."""

    span = minutes_between(check_in, check_out)
    if span > rules.max_interval_minutes:
        raise ValidationError(
            f"interval of {span} minutes exceeds the {rules.max_interval_minutes} minute limit"
        )

    count = 0
    current = check_in
    step = timedelta(minutes=1)
    while current < check_out:
        if rules.is_night_hour(current.hour):
            count += 1
        current += step
    return count


def overtime_minutes(net_worked: int, scheduled: int) -> int:
    return max(0, int(net_worked) - int(scheduled))


def late_minutes(actual_check_in: datetime, scheduled_start: time) -> int:
    expected = at_clock_time(actual_check_in, scheduled_start)
    return max(0, minutes_between(expected, actual_check_in))


def early_departure_minutes(actual_check_out: datetime, scheduled_end: time) -> int:
    expected = at_clock_time(actual_check_out, scheduled_end)
    return max(0, minutes_between(actual_check_out, expected))


def scheduled_minutes_from_template(template: Optional[ShiftTemplate], rules: TimeRules) -> int:
    if template is None:
        return rules.standard_daily_minutes

    minutes = clock_minutes(template.end_time) - clock_minutes(template.start_time)
    if minutes < 0:
        minutes += constants.MINUTES_PER_DAY
    return minutes - int(template.break_minutes or 0)


def daily_scheduled_minutes(work_hours_per_week: Optional[float], rules: TimeRules) -> int:
    """Flat daily target for employees without a shift assignment."""

    hours = work_hours_per_week or rules.default_work_hours_per_week
    return round_half_up(float(hours) / rules.working_days_per_week * 60)


def round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
