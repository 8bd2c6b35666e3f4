from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceEvent


class AttendanceEventRepository(Protocol):
    def fetch_events(
        self,
        *,
        organization_id: int,
        start_date: date,
        end_date: date,
        branch_id: Optional[int] = None,
        employment_ids: Optional[Sequence[str]] = None,
    ) -> Sequence[AttendanceEvent]:
        """Events between 00:00:00 of start_date and 23:59:59 of end_date.

        Rows are joined with employment / profile metadata.
        """

        raise NotImplementedError
