from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time, timedelta
from typing import Any, List, Optional

from ..core.constants import NO_TIME_SENTINELS

_BARE_TIME = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2})(?:\.\d+)?)?$")
# Display dates as the records UI renders them, e.g. "Tue, Mar 04".
_DISPLAY_DATE_FORMATS = ("%a, %b %d", "%a %b %d", "%b %d")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def iso_key(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def month_date_range(month: int, year: int, *, today: date) -> List[date]:
    """Every date of the month that has already happened.

    The current month stops at ``today``; future months are empty.
    """

    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    if first <= today <= last:
        last = today
    elif first > today:
        return []

    days = (last - first).days + 1
    return [first + timedelta(days=i) for i in range(days)]


def parse_time_of_day(value: Any) -> Optional[time]:
    """Read a check-in/check-out value as a local time of day.

    Accepts ``HH:MM``, ``HH:MM:SS``, ``datetime``/``time`` objects and full
    ISO timestamps. Returns None for sentinels and anything unparseable.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value

    text = str(value).strip()
    if text.lower() in NO_TIME_SENTINELS:
        return None

    m = _BARE_TIME.match(text)
    if m:
        hours, minutes = int(m.group(1)), int(m.group(2))
        seconds = int(m.group(3) or 0)
        try:
            return time(hour=hours, minute=minutes, second=seconds)
        except ValueError:
            return None

    try:
        stamp = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if stamp.tzinfo is not None:
        stamp = stamp.astimezone().replace(tzinfo=None)
    return stamp.time()


def parse_record_date(value: Any, *, month: Optional[int] = None, year: Optional[int] = None) -> Optional[date]:
    """Read the date of an upstream record.

    ISO dates and timestamps are read directly. Display dates such as
    ``"Mon, Mar 03"`` carry no year, so they need ``month`` and ``year``; a
    display date naming another month gives None. Unreadable values give None.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    try:
        return parse_iso_date(text[:10])
    except ValueError:
        pass

    if month is None or year is None:
        return None
    for fmt in _DISPLAY_DATE_FORMATS:
        try:
            parsed = datetime.strptime(f"{text} {year}", f"{fmt} %Y").date()
        except ValueError:
            continue
        return parsed if parsed.month == month else None
    return None


def hours_between(start: Optional[time], end: Optional[time]) -> float:
    if start is None or end is None:
        return 0.0
    delta = datetime.combine(date.min, end) - datetime.combine(date.min, start)
    return max(delta.total_seconds() / 3600.0, 0.0)
