from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from timesheet_engine.attendance.model import AttendanceEvent
from timesheet_engine.core.enums import CLOSED_TIMESHEET_STATUSES, EventType, TimesheetStatus
from timesheet_engine.core.exceptions import StoreError
from timesheet_engine.shifts.model import ShiftAssignment, ShiftTemplate
from timesheet_engine.timesheets.model import Timesheet
from timesheet_engine.timesheets.service import ConsolidationService

ORG_ID = 7


class InMemoryEvents:
    def __init__(self, events=None):
        self.events: list[AttendanceEvent] = list(events or [])
        self.calls = 0
        self.fail_with: Optional[Exception] = None

    def fetch_events(self, *, organization_id, start_date, end_date, branch_id=None, employment_ids=None):
        self.calls += 1
        if self.fail_with:
            raise self.fail_with
        start_at = datetime.combine(start_date, time(0, 0, 0))
        end_at = datetime.combine(end_date, time(23, 59, 59))
        out = [e for e in self.events if start_at <= e.event_at <= end_at]
        if branch_id is not None:
            out = [e for e in out if e.branch_id == branch_id]
        if employment_ids is not None:
            out = [e for e in out if e.employment_id in set(employment_ids)]
        return out


class InMemoryTimesheets:
    def __init__(self):
        self.rows: dict[tuple[int, str, date], Timesheet] = {}
        self._id = 0
        self.writes = 0
        self.fail_for: set[str] = set()
        # Simulates another user approving the row between read and write.
        self.approve_before_update: set[str] = set()

    def seed(self, timesheet: Timesheet) -> Timesheet:
        self._id += 1
        stored = replace(timesheet, timesheet_id=self._id)
        self.rows[(stored.organization_id, stored.employment_id, stored.work_date)] = stored
        return stored

    def get_for_key(self, *, organization_id, employment_id, work_date):
        return self.rows.get((organization_id, employment_id, work_date))

    def create(self, timesheet: Timesheet) -> int:
        if timesheet.employment_id in self.fail_for:
            raise StoreError(f"insert rejected for {timesheet.employment_id}")
        key = (timesheet.organization_id, timesheet.employment_id, timesheet.work_date)
        if key in self.rows:
            raise StoreError("duplicate timesheet")
        self.writes += 1
        return self.seed(timesheet).timesheet_id

    def update(self, timesheet: Timesheet) -> bool:
        if timesheet.employment_id in self.fail_for:
            raise StoreError(f"update rejected for {timesheet.employment_id}")
        key = (timesheet.organization_id, timesheet.employment_id, timesheet.work_date)
        current = self.rows.get(key)
        if current and timesheet.employment_id in self.approve_before_update:
            current = replace(current, status=TimesheetStatus.APPROVED)
            self.rows[key] = current
        if not current or current.timesheet_id != timesheet.timesheet_id:
            return False
        if current.status in CLOSED_TIMESHEET_STATUSES:
            return False
        self.writes += 1
        self.rows[key] = timesheet
        return True

    def list_employment_ids(self, *, organization_id, work_date):
        return {k[1] for k in self.rows if k[0] == organization_id and k[2] == work_date}


class InMemoryShifts:
    def __init__(self, assignments=None):
        self.assignments: list[ShiftAssignment] = list(assignments or [])
        self.status_updates: dict[tuple[str, date], str] = {}

    def fetch_for_date(self, *, organization_id, work_date, branch_id=None):
        out = [
            a
            for a in self.assignments
            if a.work_date == work_date and a.status in {"scheduled", "completed", "late", "absent"}
        ]
        if branch_id is not None:
            out = [a for a in out if a.branch_id == branch_id]
        return out

    def update_status(self, *, organization_id, employment_id, work_date, status):
        self.status_updates[(employment_id, work_date)] = status
        return True


class InMemoryEmployments:
    def __init__(self, names=None):
        self.names = dict(names or {})

    def resolve_employee_names(self, employment_ids):
        return {e: self.names[e] for e in employment_ids if e in self.names}


def make_event(employment_id: str, event_type: str, at: str, **kwargs) -> AttendanceEvent:
    make_event.counter += 1
    kwargs.setdefault("employee_name", f"Employee {employment_id}")
    return AttendanceEvent(
        event_id=make_event.counter,
        employment_id=employment_id,
        event_type=EventType(event_type),
        event_at=datetime.fromisoformat(at),
        **kwargs,
    )


make_event.counter = 0


def make_assignment(employment_id: str, work_date: date, start: time | None, end: time | None, *, break_minutes=0, status="scheduled", branch_id=None):
    template = ShiftTemplate(start_time=start, end_time=end, break_minutes=break_minutes) if start and end else None
    make_assignment.counter += 1
    return ShiftAssignment(
        assignment_id=make_assignment.counter,
        employment_id=employment_id,
        work_date=work_date,
        status=status,
        template=template,
        branch_id=branch_id,
    )


make_assignment.counter = 0


@pytest.fixture
def event():
    return make_event


@pytest.fixture
def assignment():
    return make_assignment


@pytest.fixture
def events_repo():
    return InMemoryEvents()


@pytest.fixture
def timesheets_repo():
    return InMemoryTimesheets()


@pytest.fixture
def shifts_repo():
    return InMemoryShifts()


@pytest.fixture
def employments_repo():
    return InMemoryEmployments()


@pytest.fixture
def service(events_repo, timesheets_repo, shifts_repo, employments_repo):
    return ConsolidationService(ORG_ID, events_repo, timesheets_repo, shifts_repo, employments_repo)


@pytest.fixture
def org_id():
    return ORG_ID


@pytest.fixture
def make_service():
    """Build an isolated service over fresh in-memory stores."""

    def build(events=(), **kwargs):
        timesheets = InMemoryTimesheets()
        return ConsolidationService(ORG_ID, InMemoryEvents(events), timesheets, **kwargs), timesheets

    return build
