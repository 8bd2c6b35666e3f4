from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Set

from .model import Timesheet


class TimesheetRepository(Protocol):
    def get_for_key(self, *, organization_id: int, employment_id: str, work_date: date) -> Optional[Timesheet]:
        raise NotImplementedError

    def create(self, timesheet: Timesheet) -> int:
        """Insert a new timesheet and return its id."""

        raise NotImplementedError

    def update(self, timesheet: Timesheet) -> bool:
        """Overwrite the aggregates of ``timesheet.timesheet_id``.

        Must be conditional on the stored row not being approved or locked;
        returns False when no open row matched.
        """

        raise NotImplementedError

    def list_employment_ids(self, *, organization_id: int, work_date: date) -> Set[str]:
        raise NotImplementedError
