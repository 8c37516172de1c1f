from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from ..attendance.model import DayAttendance, MonthlyAttendanceSummary
from ..core.enums import AttendanceStatus
from ..records.model import EmployeeProfile


@dataclass(frozen=True)
class EmployeeMonthlyReport:
    """One employee's month: every elapsed date plus the roll-up.

    ``error`` is set when nothing could be computed; counters are then zero.
    ``degraded`` names record kinds that were missing from the computation.
    """

    employee_id: str
    month: int
    year: int
    summary: MonthlyAttendanceSummary
    days: Tuple[DayAttendance, ...] = ()
    profile: Optional[EmployeeProfile] = None
    degraded: Tuple[str, ...] = ()
    error: Optional[str] = None

    def to_dict(self) -> dict:
        profile = self.profile or EmployeeProfile(employee_id=self.employee_id)
        return {
            "employeeId": self.employee_id,
            "name": profile.name,
            "designation": profile.designation,
            "workMode": profile.work_mode,
            "month": self.month,
            "year": self.year,
            "summary": self.summary.to_dict(),
            "dailyWorkLog": [d.to_dict() for d in self.days],
            "degraded": list(self.degraded),
            "error": self.error,
        }


@dataclass(frozen=True)
class DailyAttendanceLine:
    employee_id: str
    name: str
    designation: str
    work_mode: str
    status: AttendanceStatus
    missed: bool
    check_in: str
    check_out: str
    total_hours: float
    overtime_hours: float

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "designation": self.designation or "N/A",
            "workMode": self.work_mode,
            "attendanceStatus": self.status.value,
            "missed": self.missed,
            "checkInTime": self.check_in,
            "checkOutTime": self.check_out,
            "totalHours": self.total_hours,
            "overtimeHours": self.overtime_hours,
        }


@dataclass(frozen=True)
class DailyReport:
    work_date: date
    lines: List[DailyAttendanceLine] = field(default_factory=list)

    def summary(self) -> dict:
        def count(status: AttendanceStatus) -> int:
            return sum(1 for line in self.lines if line.status == status)

        return {
            "totalEmployees": len(self.lines),
            "presentCount": count(AttendanceStatus.PRESENT),
            "lateCount": count(AttendanceStatus.LATE),
            "missedCount": sum(1 for line in self.lines if line.missed),
            "leaveCount": count(AttendanceStatus.LEAVE),
            "permissionCount": count(AttendanceStatus.PERMISSION),
            "absentCount": count(AttendanceStatus.ABSENT),
            "date": self.work_date.strftime("%Y-%m-%d"),
        }

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.strftime("%Y-%m-%d"),
            "employees": [line.to_dict() for line in self.lines],
            "summary": self.summary(),
        }
