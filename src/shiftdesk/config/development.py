import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shiftdesk"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Reporting
TIMEZONE = os.getenv("TIMEZONE", "Asia/Jerusalem")
HOLIDAY_CALENDAR_PATH = os.getenv("HOLIDAY_CALENDAR_PATH", "")
HOLIDAYS_INCLUDE_EVES = bool(int(os.getenv("HOLIDAYS_INCLUDE_EVES", "0")))
VACATION_TALLY_POLICY = os.getenv("VACATION_TALLY_POLICY", "approved_only")
WINDOW_MEMBERSHIP = os.getenv("WINDOW_MEMBERSHIP", "overlap")
