import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shiftdesk_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

TIMEZONE = ""
HOLIDAY_CALENDAR_PATH = ""
HOLIDAYS_INCLUDE_EVES = False
VACATION_TALLY_POLICY = "approved_only"
WINDOW_MEMBERSHIP = "overlap"
