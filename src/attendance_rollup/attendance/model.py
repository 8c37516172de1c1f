from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import AttendanceStatus


def _fmt_time(t: Optional[time]) -> str:
    return t.strftime("%H:%M:%S") if t else "-"


@dataclass(frozen=True)
class DayAttendance:
    """Resolved attendance of one employee on one date."""

    work_date: date
    status: AttendanceStatus
    check_in: Optional[time]
    check_out: Optional[time]
    regular_hours: float
    overtime_hours: float
    project: str
    description: str
    missed: bool
    note: Optional[str] = None

    @property
    def worked(self) -> bool:
        return self.check_in is not None

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.strftime("%Y-%m-%d"),
            "checkIn": _fmt_time(self.check_in),
            "checkOut": _fmt_time(self.check_out),
            "hours": round(self.regular_hours, 2),
            "otHours": round(self.overtime_hours, 2),
            "project": self.project,
            "description": self.description,
            "status": self.status.value,
            "missed": self.missed,
            "note": self.note or "",
        }


@dataclass(frozen=True)
class MonthlyAttendanceSummary:
    working_days: int = 0
    missed_days: int = 0
    leave_days: int = 0
    late_days: int = 0
    permission_count: int = 0
    permission_hours: float = 0.0
    overtime_hours: float = 0.0
    total_hours: float = 0.0
    total_days: int = 0

    def to_dict(self) -> dict:
        return {
            "totalDays": self.total_days,
            "workingDays": self.working_days,
            "missedDays": self.missed_days,
            "leaveDays": self.leave_days,
            "lateDays": self.late_days,
            "permissionCount": self.permission_count,
            "permissionHours": self.permission_hours,
            "overtimeHours": self.overtime_hours,
            "totalHours": self.total_hours,
        }
