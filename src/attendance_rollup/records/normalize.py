"""Turn loosely-shaped JSON payloads from the records API into models.

Nothing here raises on bad data: unreadable dates drop the item, unreadable
numbers become 0 and unreadable times count as "not recorded".
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..common.datetime_utils import parse_record_date, parse_time_of_day
from ..common.numbers import to_hours
from ..core.enums import AttendanceStatus, RequestStatus
from .model import (
    DailyAttendanceRow,
    EmployeeProfile,
    LeaveRecord,
    OvertimeRecord,
    PermissionRecord,
    WorkLogEntry,
)

logger = logging.getLogger(__name__)


def unwrap_list(payload: Any, *keys: str) -> List[Dict[str, Any]]:
    """Return the list of dict items in ``payload`` (directly or under one of ``keys``)."""

    items: Any = payload
    if isinstance(payload, dict):
        items = None
        for key in keys:
            if isinstance(payload.get(key), list):
                items = payload[key]
                break
    if not isinstance(items, list):
        return []

    cleaned: List[Dict[str, Any]] = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            logger.debug("Skipping non-dict item at index %s: %r", i, type(item))
            continue
        cleaned.append(item)
    return cleaned


def _first(item: Dict[str, Any], *names: str) -> Any:
    for name in names:
        value = item.get(name)
        if value is not None:
            return value
    return None


def _text(value: Any) -> str:
    text = "" if value is None else str(value).strip()
    return "" if text in {"-", "--"} else text


def _in_month(d: date, month: int, year: int) -> bool:
    return d.month == month and d.year == year


def work_log_entries(payload: Any, *, month: int, year: int) -> List[WorkLogEntry]:
    entries: List[WorkLogEntry] = []
    for item in unwrap_list(payload, "dailyWorkLog", "workLog", "records", "data"):
        work_date = parse_record_date(_first(item, "date", "work_date"), month=month, year=year)
        if work_date is None or not _in_month(work_date, month, year):
            logger.debug("Dropping work log item with unusable date: %r", item.get("date"))
            continue

        entries.append(
            WorkLogEntry(
                work_date=work_date,
                check_in=parse_time_of_day(_first(item, "checkIn", "check_in", "checkInTime")),
                check_out=parse_time_of_day(_first(item, "checkOut", "check_out", "checkOutTime")),
                regular_hours=to_hours(_first(item, "hours", "regularHours", "regular_hours")),
                overtime_hours=to_hours(_first(item, "otHours", "ot_hours", "overtimeHours")),
                project=_text(item.get("project")),
                description=_text(item.get("description")),
                upstream_status=AttendanceStatus.parse(item.get("status")),
            )
        )
    return entries


def _expand(start: date, end: date) -> Iterable[date]:
    if end < start:
        start, end = end, start
    for i in range((end - start).days + 1):
        yield start + timedelta(days=i)


def leave_records(payload: Any, *, employee_id: str, month: int, year: int) -> List[LeaveRecord]:
    records: List[LeaveRecord] = []
    for item in unwrap_list(payload, "leaveRequests", "leave_requests", "records", "data"):
        status = RequestStatus.parse(item.get("status"))
        single = parse_record_date(_first(item, "date", "leave_date"))
        if single is not None:
            days: Iterable[date] = [single]
        else:
            start = parse_record_date(_first(item, "start_date", "startDate"))
            end = parse_record_date(_first(item, "end_date", "endDate")) or start
            if start is None or end is None:
                continue
            days = _expand(start, end)

        for d in days:
            if _in_month(d, month, year):
                records.append(LeaveRecord(employee_id=employee_id, leave_date=d, status=status))
    return records


def permission_records(payload: Any, *, employee_id: str, month: int, year: int) -> List[PermissionRecord]:
    records: List[PermissionRecord] = []
    for item in unwrap_list(payload, "permissionRequests", "permission_requests", "records", "data"):
        d = parse_record_date(_first(item, "date", "permission_date"))
        if d is None or not _in_month(d, month, year):
            continue
        records.append(
            PermissionRecord(
                employee_id=employee_id,
                permission_date=d,
                start_time=parse_time_of_day(_first(item, "start_time", "startTime")),
                end_time=parse_time_of_day(_first(item, "end_time", "endTime")),
                status=RequestStatus.parse(item.get("status")),
            )
        )
    return records


def overtime_records(payload: Any, *, employee_id: str, month: int, year: int) -> List[OvertimeRecord]:
    records: List[OvertimeRecord] = []
    for item in unwrap_list(payload, "records", "data"):
        raw_date = _first(item, "ot_date", "date", "request_date", "work_date", "created_at")
        d = parse_record_date(raw_date, month=month, year=year)
        if d is not None and not _in_month(d, month, year):
            continue
        if d is None and _text(raw_date):
            # A date was given but cannot be read: its month is unknown.
            logger.debug("Dropping overtime item with unusable date: %r", raw_date)
            continue
        records.append(
            OvertimeRecord(
                employee_id=employee_id,
                ot_date=d,
                total_hours=to_hours(item.get("total_hours")),
                status=RequestStatus.parse(item.get("status")),
            )
        )
    return records


def employee_profile(payload: Any, *, employee_id: str) -> EmployeeProfile:
    data = payload.get("employee", payload) if isinstance(payload, dict) else {}
    if not isinstance(data, dict):
        data = {}
    return EmployeeProfile(
        employee_id=str(_first(data, "employee_id", "id") or employee_id),
        name=_text(data.get("name")),
        designation=_text(data.get("designation")),
        work_mode=_text(_first(data, "workMode", "work_mode")),
    )


def daily_attendance_rows(payload: Any) -> List[DailyAttendanceRow]:
    rows: List[DailyAttendanceRow] = []
    for item in unwrap_list(payload, "employees", "data"):
        employee_id = _text(_first(item, "id", "employee_id", "employeeId"))
        if not employee_id:
            continue
        rows.append(
            DailyAttendanceRow(
                employee_id=employee_id,
                name=_text(item.get("name")),
                designation=_text(item.get("designation")),
                work_mode=_text(_first(item, "workMode", "work_mode")),
                check_in=parse_time_of_day(_first(item, "checkInTime", "checkIn", "check_in")),
                check_out=parse_time_of_day(_first(item, "checkOutTime", "checkOut", "check_out")),
                upstream_status=AttendanceStatus.parse(item.get("attendanceStatus")),
                total_hours=to_hours(item.get("totalHours")),
                overtime_hours=to_hours(item.get("overtimeHours")),
            )
        )
    return rows


def find_daily_row(rows: Sequence[DailyAttendanceRow], employee_id: str) -> Optional[DailyAttendanceRow]:
    for row in rows:
        if row.employee_id == employee_id:
            return row
    return None
