"""Partition a day's clock events per employee."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping, Optional, Sequence

from ..core.constants import NO_NAME_PLACEHOLDER
from ..core.enums import EventType
from .model import AttendanceEvent


def resolve_name(event: AttendanceEvent, names: Optional[Mapping[str, str]] = None) -> str:
    if names:
        name = (names.get(event.employment_id) or "").strip()
        if name:
            return name
    name = (event.employee_name or "").strip()
    return name or NO_NAME_PLACEHOLDER


def group_events_by_employee(
    events: Iterable[AttendanceEvent],
    names: Optional[Mapping[str, str]] = None,
) -> dict[str, list[AttendanceEvent]]:
    """Map employment_id -> that employee's events in chronological order.

    Employees keep the order in which they first appear in ``events``; every
    event comes back with ``employee_name`` resolved.
    """

    grouped: dict[str, list[AttendanceEvent]] = {}
    for event in events:
        resolved = replace(event, employee_name=resolve_name(event, names))
        grouped.setdefault(event.employment_id, []).append(resolved)

    for bucket in grouped.values():
        bucket.sort(key=lambda e: e.event_at)
    return grouped


def events_of_type(events: Sequence[AttendanceEvent], event_type: EventType) -> list[AttendanceEvent]:
    return sorted((e for e in events if e.event_type == event_type), key=lambda e: e.event_at)


def first_check_in(events: Sequence[AttendanceEvent]) -> Optional[AttendanceEvent]:
    check_ins = events_of_type(events, EventType.CHECK_IN)
    return check_ins[0] if check_ins else None


def last_check_out(events: Sequence[AttendanceEvent]) -> Optional[AttendanceEvent]:
    check_outs = events_of_type(events, EventType.CHECK_OUT)
    return check_outs[-1] if check_outs else None
