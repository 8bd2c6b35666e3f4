from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ShiftAssignment


class ShiftAssignmentRepository(Protocol):
    def fetch_for_date(
        self,
        *,
        organization_id: int,
        work_date: date,
        branch_id: Optional[int] = None,
    ) -> Sequence[ShiftAssignment]:
        """Assignments of the day whose status is scheduled/completed/late/absent, with their template."""

        raise NotImplementedError

    def update_status(self, *, organization_id: int, employment_id: str, work_date: date, status: str) -> bool:
        raise NotImplementedError
