from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class ShiftTemplate:
    """Domain entity: expected boundaries of a shift (clock times, no date)."""

    start_time: time
    end_time: time
    break_minutes: int = 0
    is_night_shift: bool = False


@dataclass(frozen=True)
class ShiftAssignment:
    assignment_id: int
    employment_id: str
    work_date: date
    status: str
    template: Optional[ShiftTemplate] = None
    branch_id: Optional[int] = None


@dataclass(frozen=True)
class ShiftComparisonResult:
    """Scheduled vs actual attendance for one employee and day."""

    employment_id: str
    employee_name: str
    work_date: date
    shift_scheduled: bool
    shift_start_time: Optional[time]
    shift_end_time: Optional[time]
    actual_check_in: Optional[datetime]
    actual_check_out: Optional[datetime]
    scheduled_minutes: int
    worked_minutes: int
    late_minutes: int
    early_departure_minutes: int
    overtime_minutes: int
    night_minutes: int
    attendance_status: AttendanceStatus
