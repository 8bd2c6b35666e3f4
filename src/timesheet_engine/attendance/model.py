from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EventType


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one clock event as recorded by the time-clock subsystem.

    ``employee_name``, ``employee_code``, ``branch_id`` and
    ``work_hours_per_week`` are denormalized from the employment for display
    and for the unscheduled daily target.
    """

    event_id: int
    employment_id: str
    event_type: EventType
    event_at: datetime
    is_manual_entry: bool = False
    geo_validated: Optional[bool] = None
    employee_name: Optional[str] = None
    employee_code: Optional[str] = None
    branch_id: Optional[int] = None
    work_hours_per_week: Optional[float] = None
