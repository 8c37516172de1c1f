from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ...core.enums import AttendanceStatus
from ...records.model import WorkLogEntry


@dataclass(frozen=True)
class DayContext:
    """Everything known about one employee on one date."""

    work_date: date
    today: date
    entry: Optional[WorkLogEntry] = None
    approved_leave: bool = False
    approved_permission: bool = False

    @property
    def check_in(self) -> Optional[time]:
        return self.entry.check_in if self.entry else None

    @property
    def check_out(self) -> Optional[time]:
        return self.entry.check_out if self.entry else None

    @property
    def is_today(self) -> bool:
        return self.work_date == self.today


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class StatusRule(ABC):
    """Strategy Pattern: one precedence step of status resolution."""

    @abstractmethod
    def apply(self, ctx: DayContext, current: StatusDecision) -> StatusDecision:
        raise NotImplementedError
