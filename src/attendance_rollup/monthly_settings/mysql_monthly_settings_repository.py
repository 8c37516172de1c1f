from __future__ import annotations

from typing import Optional

from ..database.connection import SettingsDatabase
from .model import MonthlySetting
from .repository import MonthlySettingsRepository


class MySQLMonthlySettingsRepository(MonthlySettingsRepository):
    def __init__(self, db: SettingsDatabase):
        self._db = db

    def get(self, *, month: int, year: int) -> Optional[MonthlySetting]:
        with self._db.cursor("Reading monthly settings") as cur:
            cur.execute(
                """
                SELECT month, year, total_days
                FROM monthly_settings
                WHERE month=%s AND year=%s
                """,
                (int(month), int(year)),
            )
            r = cur.fetchone()

        if not r:
            return None
        return MonthlySetting(month=int(r["month"]), year=int(r["year"]), total_days=int(r["total_days"]))

    def upsert(self, *, month: int, year: int, total_days: int) -> MonthlySetting:
        with self._db.cursor("Saving monthly settings") as cur:
            cur.execute(
                """
                INSERT INTO monthly_settings(month, year, total_days)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE total_days=VALUES(total_days)
                """,
                (int(month), int(year), int(total_days)),
            )
        return MonthlySetting(month=int(month), year=int(year), total_days=int(total_days))
