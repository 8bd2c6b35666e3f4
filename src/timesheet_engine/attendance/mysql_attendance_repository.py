from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import day_bounds
from ..core.enums import EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_optional_bool, db_cursor, fetchall, in_clause
from .model import AttendanceEvent
from .repository import AttendanceEventRepository


class MySQLAttendanceEventRepository(AttendanceEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_events(
        self,
        *,
        organization_id: int,
        start_date: date,
        end_date: date,
        branch_id: Optional[int] = None,
        employment_ids: Optional[Sequence[str]] = None,
    ) -> Sequence[AttendanceEvent]:
        if employment_ids is not None and not employment_ids:
            return []

        start_at, _ = day_bounds(start_date)
        _, end_at = day_bounds(end_date)

        clauses = ["ae.organization_id=%s", "ae.event_at BETWEEN %s AND %s"]
        params: list[object] = [int(organization_id), start_at, end_at]

        if branch_id is not None:
            clauses.append("ae.branch_id=%s")
            params.append(int(branch_id))
        if employment_ids is not None:
            clauses.append(f"ae.employment_id IN ({in_clause(employment_ids)})")
            params.extend(str(e) for e in employment_ids)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    ae.event_id, ae.employment_id, ae.event_type, ae.event_at,
                    ae.is_manual_entry, ae.geo_validated,
                    COALESCE(ae.branch_id, em.branch_id) AS branch_id,
                    em.employee_code, em.work_hours_per_week,
                    TRIM(CONCAT(COALESCE(p.first_name, ''), ' ', COALESCE(p.last_name, ''))) AS employee_name
                FROM attendance_events ae
                JOIN employments em ON em.employment_id = ae.employment_id
                LEFT JOIN profiles p ON p.profile_id = em.profile_id
                WHERE {where}
                ORDER BY ae.event_at ASC, ae.event_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                AttendanceEvent(
                    event_id=int(r["event_id"]),
                    employment_id=str(r["employment_id"]),
                    event_type=EventType(r["event_type"]),
                    event_at=r["event_at"],
                    is_manual_entry=bool(r.get("is_manual_entry")),
                    geo_validated=as_optional_bool(r.get("geo_validated")),
                    employee_name=r.get("employee_name") or None,
                    employee_code=r.get("employee_code"),
                    branch_id=int(r["branch_id"]) if r.get("branch_id") is not None else None,
                    work_hours_per_week=float(r["work_hours_per_week"]) if r.get("work_hours_per_week") is not None else None,
                )
                for r in rows
            ]
