"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_STANDARD_DAILY_MINUTES = 480
DEFAULT_NIGHT_START_HOUR = 21
DEFAULT_NIGHT_END_HOUR = 6
DEFAULT_LATE_THRESHOLD_MINUTES = 15
DEFAULT_MAX_INTERVAL_MINUTES = 24 * 60
DEFAULT_WORKING_DAYS_PER_WEEK = 6
DEFAULT_WORK_HOURS_PER_WEEK = 48

MINUTES_PER_DAY = 24 * 60

NO_NAME_PLACEHOLDER = "No name"
UNKNOWN_EMPLOYEE_NAME = "Unknown"
