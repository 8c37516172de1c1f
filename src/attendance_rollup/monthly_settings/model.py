from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MonthlySetting:
    """Organization-wide expected working days for one month."""

    month: int
    year: int
    total_days: int

    def to_dict(self) -> dict:
        return {"month": self.month, "year": self.year, "totalDays": self.total_days}
