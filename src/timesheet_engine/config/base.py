import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timesheets_db"),
}

ORGANIZATION_ID = int(os.getenv("ORGANIZATION_ID", "1"))

# Consolidation rules
STANDARD_DAILY_MINUTES = int(os.getenv("STANDARD_DAILY_MINUTES", "480"))
NIGHT_START_HOUR = int(os.getenv("NIGHT_START_HOUR", "21"))
NIGHT_END_HOUR = int(os.getenv("NIGHT_END_HOUR", "6"))
LATE_THRESHOLD_MINUTES = int(os.getenv("LATE_THRESHOLD_MINUTES", "15"))
MAX_INTERVAL_MINUTES = int(os.getenv("MAX_INTERVAL_MINUTES", "1440"))
WORKING_DAYS_PER_WEEK = int(os.getenv("WORKING_DAYS_PER_WEEK", "6"))
DEFAULT_WORK_HOURS_PER_WEEK = float(os.getenv("DEFAULT_WORK_HOURS_PER_WEEK", "48"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
