from __future__ import annotations

from typing import Optional, Protocol

from .model import MonthlySetting


class MonthlySettingsRepository(Protocol):
    def get(self, *, month: int, year: int) -> Optional[MonthlySetting]:
        raise NotImplementedError

    def upsert(self, *, month: int, year: int, total_days: int) -> MonthlySetting:
        """Create or replace the setting for (month, year)."""

        raise NotImplementedError
