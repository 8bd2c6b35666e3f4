from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .attendance.mysql_attendance_repository import MySQLAttendanceEventRepository
from .config import get_settings_module
from .core.logging import setup_logging
from .database.connection import DBConfig, DatabaseConnection
from .employments.mysql_employment_repository import MySQLEmploymentRepository
from .shifts.mysql_shift_repository import MySQLShiftAssignmentRepository
from .timesheets.arithmetic import TimeRules, rules_from_settings
from .timesheets.mysql_timesheet_repository import MySQLTimesheetRepository
from .timesheets.service import ConsolidationService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    events_repo: MySQLAttendanceEventRepository
    shifts_repo: MySQLShiftAssignmentRepository
    timesheets_repo: MySQLTimesheetRepository
    employments_repo: MySQLEmploymentRepository

    consolidation_service: ConsolidationService


def build_container(*, db_config: dict, organization_id: int, rules: Optional[TimeRules] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    events_repo = MySQLAttendanceEventRepository(conn)
    shifts_repo = MySQLShiftAssignmentRepository(conn)
    timesheets_repo = MySQLTimesheetRepository(conn)
    employments_repo = MySQLEmploymentRepository(conn)

    consolidation_service = ConsolidationService(
        organization_id,
        events_repo,
        timesheets_repo,
        shifts_repo,
        employments_repo,
        rules=rules,
    )

    return Container(
        conn=conn,
        events_repo=events_repo,
        shifts_repo=shifts_repo,
        timesheets_repo=timesheets_repo,
        employments_repo=employments_repo,
        consolidation_service=consolidation_service,
    )


def load_settings():
    """Import the settings module selected by APP_ENV (after reading .env)."""

    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def build_container_from_settings(organization_id: Optional[int] = None) -> Container:
    settings = load_settings()
    setup_logging(getattr(settings, "LOG_LEVEL", None))
    return build_container(
        db_config=getattr(settings, "DB_CONFIG"),
        organization_id=int(organization_id if organization_id is not None else getattr(settings, "ORGANIZATION_ID")),
        rules=rules_from_settings(settings),
    )
