from __future__ import annotations

from typing import Sequence

from ..common.numbers import round2
from ..core.enums import AttendanceStatus
from ..records.model import RawRecordSet
from .model import DayAttendance, MonthlyAttendanceSummary


class MonthlyRollUpCalculator:
    """Fold resolved days and raw records into the monthly counters."""

    @staticmethod
    def fallback_missed_days(total_days: int, working_days: int) -> int:
        return max(0, int(total_days) - int(working_days))

    @staticmethod
    def empty(total_days: int) -> MonthlyAttendanceSummary:
        return MonthlyAttendanceSummary(total_days=int(total_days))

    def summarize(self, days: Sequence[DayAttendance], raw: RawRecordSet, *, total_days: int) -> MonthlyAttendanceSummary:
        working_days = sum(1 for d in days if d.worked)
        if raw.work_log_available:
            missed_days = sum(1 for d in days if d.missed)
        else:
            missed_days = self.fallback_missed_days(total_days, working_days)

        permission_hours = sum(
            r.duration_hours for records in raw.permissions.values() for r in records if r.approved
        )
        overtime_hours = sum(r.total_hours for records in raw.overtime.values() for r in records if r.approved)
        # Undated records count toward the month only, never toward a day's totalHours.
        overtime_hours += sum(r.total_hours for r in raw.undated_overtime if r.approved)
        total_hours = sum(d.regular_hours + d.overtime_hours for d in days)

        return MonthlyAttendanceSummary(
            working_days=working_days,
            missed_days=missed_days,
            leave_days=sum(1 for d in days if d.status == AttendanceStatus.LEAVE),
            late_days=sum(1 for d in days if d.status == AttendanceStatus.LATE),
            permission_count=sum(1 for d in days if d.status == AttendanceStatus.PERMISSION),
            permission_hours=round2(permission_hours),
            overtime_hours=round2(max(overtime_hours, 0.0)),
            total_hours=round2(total_hours),
            total_days=int(total_days),
        )
