from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Iterator, Optional, Sequence

import structlog

from ..attendance.grouping import first_check_in, group_events_by_employee, last_check_out
from ..attendance.model import AttendanceEvent
from ..attendance.repository import AttendanceEventRepository
from ..common.datetime_utils import iter_dates, minutes_between, today_local
from ..common.validators import require_date_range
from ..core.constants import UNKNOWN_EMPLOYEE_NAME
from ..core.enums import AttendanceStatus, ConsolidationStatus, TimesheetStatus
from ..employments.repository import EmploymentRepository
from ..shifts.model import ShiftAssignment, ShiftComparisonResult
from ..shifts.reconciler import ShiftReconciler, assignment_status_for, employee_name_for, reconcilable
from ..shifts.repository import ShiftAssignmentRepository
from . import arithmetic
from .arithmetic import TimeRules
from .model import ConsolidationResult, ConsolidationSummary, PendingConsolidation, Timesheet
from .repository import TimesheetRepository

logger = structlog.get_logger(__name__)


class ConsolidationService:
    """Turn a day's attendance events into timesheets.

    Two flows share the same upsert rule:

    - ``consolidate_day``: events only, daily target from the employee's weekly hours.
    - ``consolidate_day_with_shifts``: events reconciled against shift assignments.

    Reads issued up front (events, assignments) propagate their errors. Anything
    that goes wrong while handling one employee becomes an ``error`` result and
    the batch carries on.
    """

    def __init__(
        self,
        organization_id: int,
        events: AttendanceEventRepository,
        timesheets: TimesheetRepository,
        shifts: ShiftAssignmentRepository | None = None,
        employments: EmploymentRepository | None = None,
        *,
        rules: TimeRules | None = None,
    ):
        self._organization_id = int(organization_id)
        self._events = events
        self._timesheets = timesheets
        self._shifts = shifts
        self._employments = employments
        self._rules = rules or TimeRules()
        self._reconciler = ShiftReconciler(self._rules)

    @property
    def organization_id(self) -> int:
        return self._organization_id

    @property
    def rules(self) -> TimeRules:
        return self._rules

    # ----- unscheduled flow -----

    def consolidate_day(self, work_date: date, branch_id: Optional[int] = None) -> ConsolidationSummary:
        log = logger.bind(organization_id=self._organization_id, work_date=work_date.isoformat(), branch_id=branch_id)
        log.info("consolidation_started", flow="events")

        events = self._events.fetch_events(
            organization_id=self._organization_id,
            start_date=work_date,
            end_date=work_date,
            branch_id=branch_id,
        )
        by_employee = group_events_by_employee(events)

        results: list[ConsolidationResult] = []
        for employment_id, emp_events in by_employee.items():
            try:
                result = self._process_employee_day(employment_id, work_date, emp_events)
            except Exception as exc:
                log.exception("employee_consolidation_failed", employment_id=employment_id)
                result = self._error_result(employment_id, emp_events[0].employee_name, work_date, exc)
            results.append(result)

        summary = ConsolidationSummary.from_results(results, total_employees=len(by_employee))
        self._log_summary(log, summary)
        return summary

    def _process_employee_day(
        self,
        employment_id: str,
        work_date: date,
        events: Sequence[AttendanceEvent],
    ) -> ConsolidationResult:
        first_event = events[0]
        employee_name = first_event.employee_name or UNKNOWN_EMPLOYEE_NAME

        check_in = first_check_in(events)
        if check_in is None:
            return ConsolidationResult(
                employment_id=employment_id,
                employee_name=employee_name,
                work_date=work_date,
                status=ConsolidationStatus.SKIPPED,
                message="no entry record",
            )

        timesheet = self.build_unscheduled_timesheet(employment_id, work_date, events)
        return self._upsert(timesheet, employee_name)

    def build_unscheduled_timesheet(
        self,
        employment_id: str,
        work_date: date,
        events: Sequence[AttendanceEvent],
    ) -> Timesheet:
        """Aggregate one employee's events without a shift.

        Worked/break/night/overtime stay 0 until a check-out closes the interval.
        """

        rules = self._rules
        first_event = events[0]
        check_in = first_check_in(events)
        check_out = last_check_out(events)
        scheduled = arithmetic.daily_scheduled_minutes(first_event.work_hours_per_week, rules)

        worked = breaks = night = overtime = 0
        if check_in is not None and check_out is not None:
            worked = minutes_between(check_in.event_at, check_out.event_at)
            breaks = arithmetic.pair_breaks(events)
            night = arithmetic.night_minutes(check_in.event_at, check_out.event_at, rules)
            overtime = arithmetic.overtime_minutes(worked - breaks, scheduled)

        return Timesheet(
            organization_id=self._organization_id,
            employment_id=employment_id,
            work_date=work_date,
            branch_id=first_event.branch_id,
            scheduled_minutes=scheduled,
            worked_minutes=worked,
            break_minutes=breaks,
            net_worked_minutes=worked - breaks,
            overtime_minutes=overtime,
            night_minutes=night,
            holiday_minutes=0,
            late_minutes=0,
            early_departure_minutes=0,
            first_check_in=check_in.event_at if check_in else None,
            last_check_out=check_out.event_at if check_out else None,
            status=TimesheetStatus.OPEN,
        )

    # ----- schedule-aware flow -----

    def _load_shift_day(
        self,
        work_date: date,
        branch_id: Optional[int],
    ) -> tuple[list[ShiftAssignment], dict[str, list[AttendanceEvent]], dict[str, str]]:
        """Up-front reads for the day: reconcilable assignments, their events and names."""

        if self._shifts is None:
            raise RuntimeError("ConsolidationService was built without a shift assignment repository")

        assignments = reconcilable(
            self._shifts.fetch_for_date(
                organization_id=self._organization_id,
                work_date=work_date,
                branch_id=branch_id,
            )
        )
        employment_ids = list(dict.fromkeys(a.employment_id for a in assignments))
        if not employment_ids:
            return [], {}, {}

        events = self._events.fetch_events(
            organization_id=self._organization_id,
            start_date=work_date,
            end_date=work_date,
            employment_ids=employment_ids,
        )
        assigned = set(employment_ids)
        events = [e for e in events if e.employment_id in assigned]

        names = dict(self._employments.resolve_employee_names(employment_ids)) if self._employments else {}
        by_employee = group_events_by_employee(events, names)
        for employment_id, emp_events in by_employee.items():
            names.setdefault(employment_id, emp_events[0].employee_name)

        return assignments, by_employee, names

    def compare_shifts_with_attendance(
        self,
        work_date: date,
        branch_id: Optional[int] = None,
    ) -> list[ShiftComparisonResult]:
        assignments, by_employee, names = self._load_shift_day(work_date, branch_id)
        return self._reconciler.compare(assignments, by_employee, work_date=work_date, names=names)

    def consolidate_day_with_shifts(
        self,
        work_date: date,
        branch_id: Optional[int] = None,
    ) -> ConsolidationSummary:
        log = logger.bind(organization_id=self._organization_id, work_date=work_date.isoformat(), branch_id=branch_id)
        log.info("consolidation_started", flow="shifts")

        assignments, by_employee, names = self._load_shift_day(work_date, branch_id)

        results: list[ConsolidationResult] = []
        for assignment in assignments:
            employment_id = assignment.employment_id
            employee_name = employee_name_for(employment_id, names)
            try:
                comparison = self._reconciler.compare_one(
                    assignment,
                    by_employee.get(employment_id, ()),
                    work_date=work_date,
                    employee_name=employee_name,
                )
                result = self._process_comparison(comparison)
            except Exception as exc:
                log.exception("employee_consolidation_failed", employment_id=employment_id)
                result = self._error_result(employment_id, employee_name, work_date, exc)
            results.append(result)

        summary = ConsolidationSummary.from_results(results, total_employees=len(assignments))
        self._log_summary(log, summary)
        return summary

    def _process_comparison(self, comparison: ShiftComparisonResult) -> ConsolidationResult:
        timesheet = self.timesheet_from_comparison(comparison)
        result = self._upsert(timesheet, comparison.employee_name)
        if result.status == ConsolidationStatus.SKIPPED:
            return result

        shift_status = assignment_status_for(comparison.attendance_status)
        written = self._shifts.update_status(
            organization_id=self._organization_id,
            employment_id=comparison.employment_id,
            work_date=comparison.work_date,
            status=shift_status.value,
        )
        if not written:
            logger.warning(
                "shift_assignment_status_not_written",
                employment_id=comparison.employment_id,
                work_date=comparison.work_date.isoformat(),
                status=shift_status.value,
            )
        return result

    def timesheet_from_comparison(self, comparison: ShiftComparisonResult) -> Timesheet:
        # Template break is already deducted from worked_minutes.
        status = TimesheetStatus.ABSENT if comparison.attendance_status == AttendanceStatus.ABSENT else TimesheetStatus.OPEN
        return Timesheet(
            organization_id=self._organization_id,
            employment_id=comparison.employment_id,
            work_date=comparison.work_date,
            scheduled_minutes=comparison.scheduled_minutes,
            worked_minutes=comparison.worked_minutes,
            break_minutes=0,
            net_worked_minutes=comparison.worked_minutes,
            overtime_minutes=comparison.overtime_minutes,
            night_minutes=comparison.night_minutes,
            holiday_minutes=0,
            late_minutes=comparison.late_minutes,
            early_departure_minutes=comparison.early_departure_minutes,
            first_check_in=comparison.actual_check_in,
            last_check_out=comparison.actual_check_out,
            status=status,
        )

    # ----- ranges and reports -----

    def iter_day_summaries(
        self,
        date_from: date,
        date_to: date,
        branch_id: Optional[int] = None,
    ) -> Iterator[tuple[date, ConsolidationSummary]]:
        """Lazily consolidate each day of [date_from, date_to], one summary per day."""

        require_date_range(date_from, date_to)
        for work_date in iter_dates(date_from, date_to):
            yield work_date, self.consolidate_day(work_date, branch_id)

    def consolidate_date_range(
        self,
        date_from: date,
        date_to: date,
        branch_id: Optional[int] = None,
    ) -> ConsolidationSummary:
        results: list[ConsolidationResult] = []
        for _, day_summary in self.iter_day_summaries(date_from, date_to, branch_id):
            results.extend(day_summary.results)
        return ConsolidationSummary.from_results(results)

    def get_pending_consolidation(self, work_date: Optional[date] = None) -> PendingConsolidation:
        work_date = work_date or today_local()

        events = self._events.fetch_events(
            organization_id=self._organization_id,
            start_date=work_date,
            end_date=work_date,
        )
        with_events = {e.employment_id for e in events}
        with_timesheets = self._timesheets.list_employment_ids(
            organization_id=self._organization_id,
            work_date=work_date,
        )

        return PendingConsolidation(
            date=work_date,
            employees_with_events=len(with_events),
            employees_with_timesheets=len(with_timesheets),
            pending=len(with_events) - len(with_timesheets),
        )

    # ----- upsert -----

    def _upsert(self, timesheet: Timesheet, employee_name: str) -> ConsolidationResult:
        """Create, update or skip the timesheet for (organization, employment, work_date)."""

        def result(status: ConsolidationStatus, timesheet_id: Optional[int], message: Optional[str] = None):
            return ConsolidationResult(
                employment_id=timesheet.employment_id,
                employee_name=employee_name,
                work_date=timesheet.work_date,
                status=status,
                message=message,
                timesheet_id=timesheet_id,
            )

        existing = self._timesheets.get_for_key(
            organization_id=self._organization_id,
            employment_id=timesheet.employment_id,
            work_date=timesheet.work_date,
        )

        if existing is None:
            new_id = self._timesheets.create(timesheet)
            return result(ConsolidationStatus.CREATED, new_id)

        if existing.is_closed:
            return result(ConsolidationStatus.SKIPPED, existing.timesheet_id, f"timesheet already {_closed_label(existing)}")

        if not self._timesheets.update(replace(timesheet, timesheet_id=existing.timesheet_id)):
            logger.warning(
                "timesheet_skipped_closed",
                employment_id=timesheet.employment_id,
                work_date=timesheet.work_date.isoformat(),
                timesheet_id=existing.timesheet_id,
            )
            return result(
                ConsolidationStatus.SKIPPED,
                existing.timesheet_id,
                "timesheet was closed before it could be updated",
            )

        return result(ConsolidationStatus.UPDATED, existing.timesheet_id)

    @staticmethod
    def _error_result(
        employment_id: str,
        employee_name: Optional[str],
        work_date: date,
        exc: Exception,
    ) -> ConsolidationResult:
        return ConsolidationResult(
            employment_id=employment_id,
            employee_name=employee_name or UNKNOWN_EMPLOYEE_NAME,
            work_date=work_date,
            status=ConsolidationStatus.ERROR,
            message=str(exc) or exc.__class__.__name__,
        )

    @staticmethod
    def _log_summary(log, summary: ConsolidationSummary) -> None:
        log.info(
            "consolidation_finished",
            total_employees=summary.total_employees,
            created=summary.created,
            updated=summary.updated,
            skipped=summary.skipped,
            errors=summary.errors,
        )


def _closed_label(timesheet: Timesheet) -> str:
    return "approved" if timesheet.status == TimesheetStatus.APPROVED else "locked"
