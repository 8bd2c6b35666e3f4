from __future__ import annotations

from datetime import date
from typing import Optional, Set

from ..core.enums import CLOSED_TIMESHEET_STATUSES, TimesheetStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Timesheet
from .repository import TimesheetRepository

_CLOSED = tuple(sorted(s.value for s in CLOSED_TIMESHEET_STATUSES))

_COLUMNS = (
    "timesheet_id, organization_id, branch_id, employment_id, work_date, "
    "scheduled_minutes, worked_minutes, break_minutes, net_worked_minutes, "
    "overtime_minutes, night_minutes, holiday_minutes, late_minutes, "
    "early_departure_minutes, first_check_in, last_check_out, status"
)


class MySQLTimesheetRepository(TimesheetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_key(self, *, organization_id: int, employment_id: str, work_date: date) -> Optional[Timesheet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM timesheets
                WHERE organization_id=%s AND employment_id=%s AND work_date=%s
                """,
                (int(organization_id), str(employment_id), work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return self._to_timesheet(r)

    def create(self, timesheet: Timesheet) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timesheets(
                    organization_id, branch_id, employment_id, work_date,
                    scheduled_minutes, worked_minutes, break_minutes, net_worked_minutes,
                    overtime_minutes, night_minutes, holiday_minutes, late_minutes,
                    early_departure_minutes, first_check_in, last_check_out, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(timesheet.organization_id),
                    timesheet.branch_id,
                    str(timesheet.employment_id),
                    timesheet.work_date,
                    *self._aggregates(timesheet),
                ),
            )
            return int(cur.lastrowid)

    def update(self, timesheet: Timesheet) -> bool:
        if timesheet.timesheet_id is None:
            raise ValueError("timesheet_id is required for update")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE timesheets
                SET scheduled_minutes=%s, worked_minutes=%s, break_minutes=%s, net_worked_minutes=%s,
                    overtime_minutes=%s, night_minutes=%s, holiday_minutes=%s, late_minutes=%s,
                    early_departure_minutes=%s, first_check_in=%s, last_check_out=%s, status=%s,
                    branch_id=COALESCE(%s, branch_id), updated_at=NOW()
                WHERE timesheet_id=%s AND status NOT IN ({in_clause(_CLOSED)})
                """,
                (
                    *self._aggregates(timesheet),
                    timesheet.branch_id,
                    int(timesheet.timesheet_id),
                    *_CLOSED,
                ),
            )
            return cur.rowcount > 0

    def list_employment_ids(self, *, organization_id: int, work_date: date) -> Set[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT employment_id
                FROM timesheets
                WHERE organization_id=%s AND work_date=%s
                """,
                (int(organization_id), work_date),
            )
            return {str(r["employment_id"]) for r in fetchall(cur)}

    @staticmethod
    def _aggregates(t: Timesheet) -> tuple:
        return (
            int(t.scheduled_minutes),
            int(t.worked_minutes),
            int(t.break_minutes),
            int(t.net_worked_minutes),
            int(t.overtime_minutes),
            int(t.night_minutes),
            int(t.holiday_minutes),
            int(t.late_minutes),
            int(t.early_departure_minutes),
            t.first_check_in,
            t.last_check_out,
            getattr(t.status, "value", t.status),
        )

    @staticmethod
    def _to_timesheet(r: dict) -> Timesheet:
        return Timesheet(
            timesheet_id=int(r["timesheet_id"]),
            organization_id=int(r["organization_id"]),
            branch_id=int(r["branch_id"]) if r.get("branch_id") is not None else None,
            employment_id=str(r["employment_id"]),
            work_date=r["work_date"],
            scheduled_minutes=int(r.get("scheduled_minutes") or 0),
            worked_minutes=int(r.get("worked_minutes") or 0),
            break_minutes=int(r.get("break_minutes") or 0),
            net_worked_minutes=int(r.get("net_worked_minutes") or 0),
            overtime_minutes=int(r.get("overtime_minutes") or 0),
            night_minutes=int(r.get("night_minutes") or 0),
            holiday_minutes=int(r.get("holiday_minutes") or 0),
            late_minutes=int(r.get("late_minutes") or 0),
            early_departure_minutes=int(r.get("early_departure_minutes") or 0),
            first_check_in=r.get("first_check_in"),
            last_check_out=r.get("last_check_out"),
            status=TimesheetStatus.parse(r["status"]),
        )
