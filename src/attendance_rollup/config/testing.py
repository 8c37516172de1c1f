import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

RECORDS_API_BASE = os.getenv("RECORDS_API_BASE", "http://records.test")
FETCH_TIMEOUT_SECONDS = 8.0
MAX_CONCURRENCY = 4

LATE_CUTOFF = "09:00"
DEFAULT_TOTAL_DAYS = 28
WORK_LOG_REQUIRED = True
REQUEST_LOOKUP_MODE = "monthly"

MONTHLY_SETTINGS_BACKEND = os.getenv("MONTHLY_SETTINGS_BACKEND", "http")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_test"),
}

AUTO_INIT_DB = False
