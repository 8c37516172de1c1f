import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Records API (work logs, leave/permission/overtime requests, employees)
RECORDS_API_BASE = os.getenv("RECORDS_API_BASE", "http://localhost:3000")
FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "10"))
MAX_CONCURRENCY = int(os.getenv("MAX_CONCURRENCY", "8"))

LATE_CUTOFF = os.getenv("LATE_CUTOFF", "09:00")
DEFAULT_TOTAL_DAYS = int(os.getenv("DEFAULT_TOTAL_DAYS", "28"))
WORK_LOG_REQUIRED = bool(int(os.getenv("WORK_LOG_REQUIRED", "1")))
# "monthly": one leave/permission call per employee; "per_date": one daily-attendance call per date
REQUEST_LOOKUP_MODE = os.getenv("REQUEST_LOOKUP_MODE", "monthly")

# "mysql" keeps monthly settings locally, "http" reads/writes them on the records API
MONTHLY_SETTINGS_BACKEND = os.getenv("MONTHLY_SETTINGS_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

# If enabled, app will create the monthly_settings table on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
