from __future__ import annotations

from datetime import date
from typing import AsyncContextManager, Protocol, Sequence

from .model import DailyAttendanceRow, EmployeeProfile, LeaveRecord, OvertimeRecord, PermissionRecord, WorkLogEntry


class RecordSource(Protocol):
    """Read side of the external persistence API.

    Implementations raise ``UpstreamError`` when a call fails; callers
    decide whether that kind degrades or aborts.
    """

    def session(self) -> AsyncContextManager["RecordSource"]:
        """Scope in which calls share connections; nested sessions reuse the outer one."""

        raise NotImplementedError

    async def get_work_log(self, *, employee_id: str, month: int, year: int) -> Sequence[WorkLogEntry]:
        raise NotImplementedError

    async def get_leaves(self, *, employee_id: str, month: int, year: int) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    async def get_permissions(self, *, employee_id: str, month: int, year: int) -> Sequence[PermissionRecord]:
        raise NotImplementedError

    async def get_overtime(self, *, employee_id: str, month: int, year: int) -> Sequence[OvertimeRecord]:
        raise NotImplementedError

    async def get_employee(self, *, employee_id: str) -> EmployeeProfile:
        raise NotImplementedError

    async def get_daily_attendance(self, *, work_date: date) -> Sequence[DailyAttendanceRow]:
        raise NotImplementedError
