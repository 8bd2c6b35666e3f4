from __future__ import annotations

from typing import Mapping, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .repository import EmploymentRepository


class MySQLEmploymentRepository(EmploymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def resolve_employee_names(self, employment_ids: Sequence[str]) -> Mapping[str, str]:
        ids = sorted({str(e) for e in employment_ids})
        if not ids:
            return {}

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    em.employment_id,
                    TRIM(CONCAT(COALESCE(p.first_name, ''), ' ', COALESCE(p.last_name, ''))) AS full_name
                FROM employments em
                LEFT JOIN profiles p ON p.profile_id = em.profile_id
                WHERE em.employment_id IN ({in_clause(ids)})
                """,
                tuple(ids),
            )
            rows = fetchall(cur)

        names: dict[str, str] = {}
        for r in rows:
            full_name = (r.get("full_name") or "").strip()
            if full_name:
                names[str(r["employment_id"])] = full_name
        return names
