from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Dict, Optional, Tuple

from ..common.datetime_utils import hours_between
from ..core.enums import AttendanceStatus, RecordKind, RequestStatus


@dataclass(frozen=True)
class WorkLogEntry:
    """One raw attendance record for an employee on one date."""

    work_date: date
    check_in: Optional[time]
    check_out: Optional[time]
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    project: str = ""
    description: str = ""
    # Status the upstream system stored with the log, if any.
    upstream_status: Optional[AttendanceStatus] = None

    @property
    def has_check_in(self) -> bool:
        return self.check_in is not None

    @property
    def has_check_out(self) -> bool:
        return self.check_out is not None


@dataclass(frozen=True)
class LeaveRecord:
    employee_id: str
    leave_date: date
    status: RequestStatus

    @property
    def approved(self) -> bool:
        return self.status == RequestStatus.APPROVED


@dataclass(frozen=True)
class PermissionRecord:
    employee_id: str
    permission_date: date
    start_time: Optional[time]
    end_time: Optional[time]
    status: RequestStatus

    @property
    def approved(self) -> bool:
        return self.status == RequestStatus.APPROVED

    @property
    def duration_hours(self) -> float:
        return hours_between(self.start_time, self.end_time)


@dataclass(frozen=True)
class OvertimeRecord:
    """Overtime hours; ``ot_date`` is None when the record carries no date."""

    employee_id: str
    ot_date: Optional[date]
    total_hours: float
    status: RequestStatus

    @property
    def approved(self) -> bool:
        return self.status == RequestStatus.APPROVED


@dataclass(frozen=True)
class EmployeeProfile:
    employee_id: str
    name: str = ""
    designation: str = ""
    work_mode: str = ""


@dataclass(frozen=True)
class RawRecordSet:
    """Records of one employee/month bucketed by date.

    Leave, permission and overtime buckets hold every record for the date
    (approved or not); the resolver and calculator filter on status.
    ``undated_overtime`` holds overtime records without a date: they count
    toward the month total but belong to no single day.
    A kind listed in ``failed`` could not be fetched and is empty.
    """

    employee_id: str
    month: int
    year: int
    dates: Tuple[date, ...]
    work_log: Dict[date, WorkLogEntry] = field(default_factory=dict)
    leaves: Dict[date, Tuple[LeaveRecord, ...]] = field(default_factory=dict)
    permissions: Dict[date, Tuple[PermissionRecord, ...]] = field(default_factory=dict)
    overtime: Dict[date, Tuple[OvertimeRecord, ...]] = field(default_factory=dict)
    undated_overtime: Tuple[OvertimeRecord, ...] = ()
    failed: Dict[RecordKind, str] = field(default_factory=dict)
    profile: Optional[EmployeeProfile] = None

    @property
    def work_log_available(self) -> bool:
        return RecordKind.WORK_LOG not in self.failed

    def has_approved_leave(self, d: date) -> bool:
        return any(r.approved for r in self.leaves.get(d, ()))

    def has_approved_permission(self, d: date) -> bool:
        return any(r.approved for r in self.permissions.get(d, ()))

    def approved_overtime_hours(self, d: date) -> Optional[float]:
        approved = [r.total_hours for r in self.overtime.get(d, ()) if r.approved]
        if not approved:
            return None
        return sum(approved)


@dataclass(frozen=True)
class DailyAttendanceRow:
    """One employee as reported by the daily-attendance endpoint."""

    employee_id: str
    name: str
    designation: str
    work_mode: str
    check_in: Optional[time]
    check_out: Optional[time]
    upstream_status: Optional[AttendanceStatus] = None
    total_hours: float = 0.0
    overtime_hours: float = 0.0
