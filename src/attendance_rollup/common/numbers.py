from __future__ import annotations

import math
from typing import Any


def to_float(value: Any) -> float:
    """Best-effort numeric read: ``"7.5h"`` -> 7.5, junk/NaN -> 0.0."""

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().lower().rstrip("h").strip()
        try:
            number = float(text)
        except ValueError:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def to_hours(value: Any) -> float:
    """Like to_float but never negative."""
    return max(to_float(value), 0.0)


def round2(value: float) -> float:
    return round(float(value), 2)
