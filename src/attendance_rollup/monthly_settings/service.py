from __future__ import annotations

import logging
from typing import Any

from ..common.validators import require_month, require_total_days, require_year
from ..core.constants import DEFAULT_TOTAL_DAYS
from ..core.exceptions import StorageError, UpstreamError
from .model import MonthlySetting
from .repository import MonthlySettingsRepository

logger = logging.getLogger(__name__)


class MonthlySettingsService:
    def __init__(self, settings: MonthlySettingsRepository, *, default_total_days: int = DEFAULT_TOTAL_DAYS):
        self._settings = settings
        self._default_total_days = int(default_total_days)

    def get(self, *, month: Any, year: Any) -> MonthlySetting:
        """Setting for the month, or the default when none was saved."""

        month = require_month(month)
        year = require_year(year)
        setting = self._settings.get(month=month, year=year)
        if setting is None:
            return MonthlySetting(month=month, year=year, total_days=self._default_total_days)
        return setting

    def total_days(self, *, month: int, year: int) -> int:
        """Like get() but never fails; aggregation falls back to the default."""

        try:
            return self.get(month=month, year=year).total_days
        except (UpstreamError, StorageError) as e:
            logger.warning("Monthly settings %s/%s unavailable, using %s: %s", month, year, self._default_total_days, e)
            return self._default_total_days

    def update(self, *, month: Any, year: Any, total_days: Any) -> MonthlySetting:
        month = require_month(month)
        year = require_year(year)
        total_days = require_total_days(total_days)
        setting = self._settings.upsert(month=month, year=year, total_days=total_days)
        logger.info("Monthly settings %s/%s set to %s days", month, year, total_days)
        return setting
