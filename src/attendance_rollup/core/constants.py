"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_TOTAL_DAYS = 28
MIN_TOTAL_DAYS = 1
MAX_TOTAL_DAYS = 31

DEFAULT_LATE_CUTOFF = time(9, 0)

DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_CONCURRENCY = 8

# Placeholder values the time-tracking API uses for "no time recorded".
NO_TIME_SENTINELS = frozenset({"", "-", "--", "none", "null"})

NO_LOG_PROJECT = "No Work Assigned"
NO_LOG_DESCRIPTION = "No work logged for this date"
