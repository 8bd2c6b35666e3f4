from .base import *  # noqa: F401,F403

DEBUG = False
TESTING = True

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "timesheets_test",
}

ORGANIZATION_ID = 1
LOG_LEVEL = "WARNING"
