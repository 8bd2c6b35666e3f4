"""Example: consolidate one day's attendance through the service layer.

Reads DB settings from the APP_ENV-selected settings module (and .env).

    python examples/example_usage.py [YYYY-MM-DD]

Without a date argument, yesterday is consolidated.
"""

import sys
from datetime import date, timedelta

from timesheet_engine.common.datetime_utils import parse_iso_date
from timesheet_engine.container import build_container_from_settings


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    work_date = parse_iso_date(argv[0]) if argv else date.today() - timedelta(days=1)

    container = build_container_from_settings()
    service = container.consolidation_service

    summary = service.consolidate_day_with_shifts(work_date)
    print(
        f"{work_date}: created={summary.created} updated={summary.updated} "
        f"skipped={summary.skipped} errors={summary.errors}"
    )
    print(service.get_pending_consolidation(work_date))


if __name__ == "__main__":
    main()
