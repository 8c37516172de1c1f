from __future__ import annotations

from typing import Any

from ..core.constants import MAX_TOTAL_DAYS, MIN_TOTAL_DAYS
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_int(value: Any, field_name: str) -> int:
    if value is None or isinstance(value, bool) or str(value).strip() == "":
        raise ValidationError(f"{field_name} is required")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a whole number")


def require_month(value: Any) -> int:
    month = require_int(value, "month")
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    return month


def require_year(value: Any) -> int:
    year = require_int(value, "year")
    if not 1000 <= year <= 9999:
        raise ValidationError("year must have 4 digits")
    return year


def require_total_days(value: Any) -> int:
    total = require_int(value, "totalDays")
    if not MIN_TOTAL_DAYS <= total <= MAX_TOTAL_DAYS:
        raise ValidationError(f"Total days must be between {MIN_TOTAL_DAYS} and {MAX_TOTAL_DAYS}")
    return total
