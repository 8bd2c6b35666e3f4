from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional, Union

from ..core.enums import ConsolidationStatus, TimesheetStatus, is_closed_status


@dataclass(frozen=True)
class Timesheet:
    """Domain entity: one employee's consolidated day, keyed by (organization, employment, work_date)."""

    organization_id: int
    employment_id: str
    work_date: date
    scheduled_minutes: int = 0
    worked_minutes: int = 0
    break_minutes: int = 0
    net_worked_minutes: int = 0
    overtime_minutes: int = 0
    night_minutes: int = 0
    holiday_minutes: int = 0
    late_minutes: int = 0
    early_departure_minutes: int = 0
    first_check_in: Optional[datetime] = None
    last_check_out: Optional[datetime] = None
    status: Union[TimesheetStatus, str] = TimesheetStatus.OPEN
    branch_id: Optional[int] = None
    timesheet_id: Optional[int] = None

    @property
    def is_closed(self) -> bool:
        return is_closed_status(self.status)


@dataclass(frozen=True)
class ConsolidationResult:
    employment_id: str
    employee_name: str
    work_date: date
    status: ConsolidationStatus
    message: Optional[str] = None
    timesheet_id: Optional[int] = None


@dataclass(frozen=True)
class ConsolidationSummary:
    total_employees: int
    created: int
    updated: int
    skipped: int
    errors: int
    results: list[ConsolidationResult] = field(default_factory=list)

    @classmethod
    def from_results(
        cls,
        results: Iterable[ConsolidationResult],
        *,
        total_employees: Optional[int] = None,
    ) -> "ConsolidationSummary":
        """Count outcomes; total_employees defaults to the distinct employment ids."""

        results = list(results)

        def count(status: ConsolidationStatus) -> int:
            return sum(1 for r in results if r.status == status)

        if total_employees is None:
            total_employees = len({r.employment_id for r in results})

        return cls(
            total_employees=total_employees,
            created=count(ConsolidationStatus.CREATED),
            updated=count(ConsolidationStatus.UPDATED),
            skipped=count(ConsolidationStatus.SKIPPED),
            errors=count(ConsolidationStatus.ERROR),
            results=results,
        )


@dataclass(frozen=True)
class PendingConsolidation:
    date: date
    employees_with_events: int
    employees_with_timesheets: int
    pending: int
