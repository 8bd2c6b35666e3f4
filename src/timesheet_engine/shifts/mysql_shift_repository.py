from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import ShiftAssignmentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, normalize_mysql_time
from .model import ShiftAssignment, ShiftTemplate
from .repository import ShiftAssignmentRepository

RECONCILED_STATUSES = tuple(s.value for s in ShiftAssignmentStatus)


class MySQLShiftAssignmentRepository(ShiftAssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_for_date(
        self,
        *,
        organization_id: int,
        work_date: date,
        branch_id: Optional[int] = None,
    ) -> Sequence[ShiftAssignment]:
        clauses = [
            "sa.organization_id=%s",
            "sa.work_date=%s",
            f"sa.status IN ({in_clause(RECONCILED_STATUSES)})",
        ]
        params: list[object] = [int(organization_id), work_date, *RECONCILED_STATUSES]
        if branch_id is not None:
            clauses.append("sa.branch_id=%s")
            params.append(int(branch_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    sa.assignment_id, sa.employment_id, sa.work_date, sa.status, sa.branch_id,
                    st.shift_template_id, st.start_time, st.end_time, st.break_minutes, st.is_night_shift
                FROM shift_assignments sa
                LEFT JOIN shift_templates st ON st.shift_template_id = sa.shift_template_id
                WHERE {where}
                ORDER BY sa.assignment_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [self._to_assignment(r) for r in rows]

    def update_status(self, *, organization_id: int, employment_id: str, work_date: date, status: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shift_assignments
                SET status=%s, updated_at=NOW()
                WHERE organization_id=%s AND employment_id=%s AND work_date=%s
                """,
                (str(status), int(organization_id), str(employment_id), work_date),
            )
            return cur.rowcount > 0

    @staticmethod
    def _to_assignment(r: dict) -> ShiftAssignment:
        template = None
        if r.get("shift_template_id") is not None and r.get("start_time") is not None and r.get("end_time") is not None:
            template = ShiftTemplate(
                start_time=normalize_mysql_time(r["start_time"]),
                end_time=normalize_mysql_time(r["end_time"]),
                break_minutes=int(r.get("break_minutes") or 0),
                is_night_shift=bool(r.get("is_night_shift")),
            )
        return ShiftAssignment(
            assignment_id=int(r["assignment_id"]),
            employment_id=str(r["employment_id"]),
            work_date=r["work_date"],
            status=str(r["status"]),
            template=template,
            branch_id=int(r["branch_id"]) if r.get("branch_id") is not None else None,
        )
