from __future__ import annotations

from enum import Enum


class EventType(str, Enum):
    """Kinds of clock events produced by the time-clock subsystem."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"


class AttendanceStatus(str, Enum):
    """Outcome of comparing a scheduled shift against actual attendance."""

    ON_TIME = "on_time"
    LATE = "late"
    ABSENT = "absent"
    INCOMPLETE = "incomplete"
    NO_SHIFT = "no_shift"
    REST_DAY = "rest_day"


class ShiftAssignmentStatus(str, Enum):
    """Assignment states taken into account during reconciliation."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    LATE = "late"
    ABSENT = "absent"


class TimesheetStatus(str, Enum):
    OPEN = "open"
    ABSENT = "absent"
    APPROVED = "approved"
    LOCKED = "locked"

    @classmethod
    def parse(cls, value: str) -> "TimesheetStatus | str":
        """Known statuses become members; anything else is passed through as-is."""
        try:
            return cls(value)
        except ValueError:
            return str(value)


CLOSED_TIMESHEET_STATUSES = frozenset({TimesheetStatus.APPROVED, TimesheetStatus.LOCKED})


def is_closed_status(status: "TimesheetStatus | str") -> bool:
    return status in CLOSED_TIMESHEET_STATUSES


class ConsolidationStatus(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    ERROR = "error"
