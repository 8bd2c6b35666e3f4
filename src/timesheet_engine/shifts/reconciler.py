from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Sequence

from ..attendance.grouping import first_check_in, last_check_out
from ..attendance.model import AttendanceEvent
from ..common.datetime_utils import minutes_between
from ..core.constants import NO_NAME_PLACEHOLDER
from ..core.enums import AttendanceStatus, ShiftAssignmentStatus
from ..timesheets import arithmetic
from ..timesheets.arithmetic import TimeRules
from .model import ShiftAssignment, ShiftComparisonResult

RECONCILED_STATUSES = frozenset(s.value for s in ShiftAssignmentStatus)

# Status written back to the assignment once its timesheet is consolidated.
ASSIGNMENT_STATUS_BY_ATTENDANCE = {
    AttendanceStatus.ON_TIME: ShiftAssignmentStatus.COMPLETED,
    AttendanceStatus.LATE: ShiftAssignmentStatus.LATE,
    AttendanceStatus.ABSENT: ShiftAssignmentStatus.ABSENT,
}


def assignment_status_for(attendance_status: AttendanceStatus) -> ShiftAssignmentStatus:
    return ASSIGNMENT_STATUS_BY_ATTENDANCE.get(attendance_status, ShiftAssignmentStatus.SCHEDULED)


def reconcilable(assignments: Sequence[ShiftAssignment]) -> list[ShiftAssignment]:
    return [a for a in assignments if a.status in RECONCILED_STATUSES]


def employee_name_for(employment_id: str, names: Optional[Mapping[str, str]] = None) -> str:
    return (names or {}).get(employment_id) or NO_NAME_PLACEHOLDER


class ShiftReconciler:
    """Join a day's shift assignments with the actual clock events."""

    def __init__(self, rules: Optional[TimeRules] = None):
        self._rules = rules or TimeRules()

    def compare(
        self,
        assignments: Sequence[ShiftAssignment],
        events_by_employee: Mapping[str, Sequence[AttendanceEvent]],
        *,
        work_date: date,
        names: Optional[Mapping[str, str]] = None,
    ) -> list[ShiftComparisonResult]:
        return [
            self.compare_one(
                assignment,
                events_by_employee.get(assignment.employment_id, ()),
                work_date=work_date,
                employee_name=employee_name_for(assignment.employment_id, names),
            )
            for assignment in reconcilable(assignments)
        ]

    def compare_one(
        self,
        assignment: ShiftAssignment,
        events: Sequence[AttendanceEvent],
        *,
        work_date: date,
        employee_name: str,
    ) -> ShiftComparisonResult:
        """Compare one assignment with its events.

        Raises ValidationError when the closed interval is longer than
        ``rules.max_interval_minutes``.
        """

        rules = self._rules
        template = assignment.template
        check_in = first_check_in(events)
        check_out = last_check_out(events)

        scheduled = arithmetic.scheduled_minutes_from_template(template, rules)
        worked = late = early = overtime = night = 0

        if check_in is None:
            status = AttendanceStatus.ABSENT
        elif check_out is None:
            status = AttendanceStatus.INCOMPLETE
        else:
            worked = minutes_between(check_in.event_at, check_out.event_at)
            worked -= template.break_minutes if template else 0
            if template:
                late = arithmetic.late_minutes(check_in.event_at, template.start_time)
                early = arithmetic.early_departure_minutes(check_out.event_at, template.end_time)
            overtime = arithmetic.overtime_minutes(worked, scheduled)
            night = arithmetic.night_minutes(check_in.event_at, check_out.event_at, rules)
            status = AttendanceStatus.LATE if late > rules.late_threshold_minutes else AttendanceStatus.ON_TIME

        return ShiftComparisonResult(
            employment_id=assignment.employment_id,
            employee_name=employee_name,
            work_date=work_date,
            shift_scheduled=True,
            shift_start_time=template.start_time if template else None,
            shift_end_time=template.end_time if template else None,
            actual_check_in=check_in.event_at if check_in else None,
            actual_check_out=check_out.event_at if check_out else None,
            scheduled_minutes=scheduled,
            worked_minutes=worked,
            late_minutes=late,
            early_departure_minutes=early,
            overtime_minutes=overtime,
            night_minutes=night,
            attendance_status=status,
        )
