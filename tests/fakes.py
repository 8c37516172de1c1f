from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import date, time
from typing import Dict, List, Optional, Tuple

from attendance_rollup.core.enums import RequestStatus
from attendance_rollup.monthly_settings.model import MonthlySetting
from attendance_rollup.records.model import (
    DailyAttendanceRow,
    EmployeeProfile,
    LeaveRecord,
    OvertimeRecord,
    PermissionRecord,
    WorkLogEntry,
)


class FakeRecordSource:
    """In-memory RecordSource; ``failures[(employee_id, kind)]`` makes a call raise."""

    def __init__(self):
        self.work_logs: Dict[str, List[WorkLogEntry]] = {}
        self.leaves: Dict[str, List[LeaveRecord]] = {}
        self.permissions: Dict[str, List[PermissionRecord]] = {}
        self.overtime: Dict[str, List[OvertimeRecord]] = {}
        self.profiles: Dict[str, EmployeeProfile] = {}
        self.daily: Dict[date, List[DailyAttendanceRow]] = {}
        self.failures: Dict[Tuple[str, str], Exception] = {}
        self.delays: Dict[Tuple[str, str], float] = {}
        self.calls: List[Tuple[str, str]] = []
        self.sessions = 0
        self.open_sessions = 0
        self.calls_outside_session = 0

    @asynccontextmanager
    async def session(self):
        # Nested sessions reuse the outer one, as HttpRecordSource does.
        if not self.open_sessions:
            self.sessions += 1
        self.open_sessions += 1
        try:
            yield self
        finally:
            self.open_sessions -= 1

    async def _maybe_fail(self, employee_id: str, kind: str) -> None:
        self.calls.append((employee_id, kind))
        if not self.open_sessions:
            self.calls_outside_session += 1
        delay = self.delays.get((employee_id, kind))
        if delay:
            await asyncio.sleep(delay)
        error = self.failures.get((employee_id, kind))
        if error is not None:
            raise error

    async def get_work_log(self, *, employee_id, month, year):
        await self._maybe_fail(employee_id, "work_log")
        return list(self.work_logs.get(employee_id, []))

    async def get_leaves(self, *, employee_id, month, year):
        await self._maybe_fail(employee_id, "leave")
        return list(self.leaves.get(employee_id, []))

    async def get_permissions(self, *, employee_id, month, year):
        await self._maybe_fail(employee_id, "permission")
        return list(self.permissions.get(employee_id, []))

    async def get_overtime(self, *, employee_id, month, year):
        await self._maybe_fail(employee_id, "overtime")
        return list(self.overtime.get(employee_id, []))

    async def get_employee(self, *, employee_id):
        await self._maybe_fail(employee_id, "employee")
        return self.profiles.get(employee_id, EmployeeProfile(employee_id=employee_id, name=f"Employee {employee_id}"))

    async def get_daily_attendance(self, *, work_date):
        await self._maybe_fail(work_date.isoformat(), "daily")
        return list(self.daily.get(work_date, []))


class InMemoryMonthlySettings:
    def __init__(self, error: Optional[Exception] = None):
        self._items: Dict[Tuple[int, int], MonthlySetting] = {}
        self._error = error

    def get(self, *, month, year):
        if self._error:
            raise self._error
        return self._items.get((int(month), int(year)))

    def upsert(self, *, month, year, total_days):
        if self._error:
            raise self._error
        setting = MonthlySetting(month=int(month), year=int(year), total_days=int(total_days))
        self._items[(setting.month, setting.year)] = setting
        return setting


def full_day(d: date, *, check_in=time(8, 55), check_out=time(17, 30), hours=8.0, ot=0.0) -> WorkLogEntry:
    return WorkLogEntry(
        work_date=d,
        check_in=check_in,
        check_out=check_out,
        regular_hours=hours,
        overtime_hours=ot,
        project="Payroll",
        description="Daily work",
    )


def approved_permission(employee_id: str, d: date, start: time, end: time, status=RequestStatus.APPROVED):
    return PermissionRecord(employee_id=employee_id, permission_date=d, start_time=start, end_time=end, status=status)


