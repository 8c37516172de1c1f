from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Sequence, Tuple, TypeVar

from ..common.datetime_utils import iso_key, month_date_range
from ..common.outcome import Outcome, capture
from ..common.validators import require_month, require_non_empty, require_year
from ..core.constants import DEFAULT_FETCH_TIMEOUT_SECONDS, DEFAULT_MAX_CONCURRENCY
from ..core.enums import AttendanceStatus, RecordKind, RequestStatus
from ..core.exceptions import PrimaryFetchError
from .model import DailyAttendanceRow, LeaveRecord, PermissionRecord, RawRecordSet, WorkLogEntry
from .normalize import find_daily_row
from .repository import RecordSource

logger = logging.getLogger(__name__)

R = TypeVar("R")


class RequestLookupMode(str, Enum):
    MONTHLY = "monthly"
    PER_DATE = "per_date"


def _bucket(records: Iterable[R], key, allowed: set) -> Dict[date, Tuple[R, ...]]:
    out: Dict[date, List[R]] = defaultdict(list)
    for r in records:
        d = key(r)
        if d in allowed:
            out[d].append(r)
    return {d: tuple(items) for d, items in out.items()}


class RawRecordFetcher:
    """Fetch the four record kinds of one employee/month and bucket them by date.

    Kinds are fetched concurrently, each under its own deadline. A failed
    leave/permission/overtime fetch degrades to an empty bucket; a failed
    work-log fetch raises ``PrimaryFetchError`` unless ``work_log_required``
    is off.
    """

    def __init__(
        self,
        source: RecordSource,
        *,
        timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        work_log_required: bool = True,
        request_lookup_mode: RequestLookupMode = RequestLookupMode.MONTHLY,
    ):
        self._source = source
        self._timeout = float(timeout)
        self._max_concurrency = max(int(max_concurrency), 1)
        self._work_log_required = bool(work_log_required)
        self._mode = RequestLookupMode(request_lookup_mode)

    async def fetch(self, *, employee_id: str, month: int, year: int, today: date) -> RawRecordSet:
        employee_id = require_non_empty(employee_id, "employeeId")
        month = require_month(month)
        year = require_year(year)

        dates = month_date_range(month, year, today=today)
        allowed = set(dates)
        label = f"{employee_id} {year}-{month:02d}"

        async with self._source.session():
            work_log_task = capture(
                self._source.get_work_log(employee_id=employee_id, month=month, year=year),
                timeout=self._timeout,
                label=f"work log {label}",
            )
            overtime_task = capture(
                self._source.get_overtime(employee_id=employee_id, month=month, year=year),
                timeout=self._timeout,
                label=f"overtime {label}",
            )

            failed: Dict[RecordKind, str] = {}
            if self._mode == RequestLookupMode.PER_DATE:
                work_log_out, overtime_out, (leaves, permissions, lookup_failure) = await asyncio.gather(
                    work_log_task,
                    overtime_task,
                    self._requests_per_date(employee_id, dates),
                )
                if lookup_failure:
                    failed[RecordKind.LEAVE] = lookup_failure
                    failed[RecordKind.PERMISSION] = lookup_failure
            else:
                work_log_out, overtime_out, leave_out, permission_out = await asyncio.gather(
                    work_log_task,
                    overtime_task,
                    capture(
                        self._source.get_leaves(employee_id=employee_id, month=month, year=year),
                        timeout=self._timeout,
                        label=f"leaves {label}",
                    ),
                    capture(
                        self._source.get_permissions(employee_id=employee_id, month=month, year=year),
                        timeout=self._timeout,
                        label=f"permissions {label}",
                    ),
                )
                leaves = self._value_or_empty(leave_out, RecordKind.LEAVE, failed)
                permissions = self._value_or_empty(permission_out, RecordKind.PERMISSION, failed)

        if not work_log_out.ok and self._work_log_required:
            logger.error("Work log unavailable for %s: %s", label, work_log_out.reason)
            raise PrimaryFetchError(f"unable to compute attendance for this employee ({work_log_out.reason})")

        work_log_entries: Sequence[WorkLogEntry] = self._value_or_empty(work_log_out, RecordKind.WORK_LOG, failed)
        overtime = self._value_or_empty(overtime_out, RecordKind.OVERTIME, failed)

        work_log: Dict[date, WorkLogEntry] = {}
        for entry in work_log_entries:
            if entry.work_date not in allowed:
                continue
            if entry.work_date in work_log:
                logger.debug("Duplicate work log for %s on %s ignored", employee_id, iso_key(entry.work_date))
                continue
            work_log[entry.work_date] = entry

        if failed:
            logger.warning("Partial records for %s, degraded kinds: %s", label, ", ".join(k.value for k in failed))

        return RawRecordSet(
            employee_id=employee_id,
            month=month,
            year=year,
            dates=tuple(dates),
            work_log=work_log,
            leaves=_bucket(leaves, lambda r: r.leave_date, allowed),
            permissions=_bucket(permissions, lambda r: r.permission_date, allowed),
            overtime=_bucket(overtime, lambda r: r.ot_date, allowed),
            undated_overtime=tuple(r for r in overtime if r.ot_date is None),
            failed=failed,
        )

    @staticmethod
    def _value_or_empty(outcome: Outcome, kind: RecordKind, failed: Dict[RecordKind, str]) -> Sequence:
        if outcome.ok:
            return outcome.value or ()
        failed[kind] = outcome.reason or "unavailable"
        return ()

    async def _requests_per_date(
        self, employee_id: str, dates: Sequence[date]
    ) -> Tuple[List[LeaveRecord], List[PermissionRecord], str]:
        """Read leave/permission status from one daily-attendance call per date."""

        sem = asyncio.Semaphore(self._max_concurrency)

        async def one(d: date) -> Outcome[Sequence[DailyAttendanceRow]]:
            async with sem:
                return await capture(
                    self._source.get_daily_attendance(work_date=d),
                    timeout=self._timeout,
                    label=f"daily attendance {iso_key(d)}",
                )

        outcomes = await asyncio.gather(*(one(d) for d in dates))

        leaves: List[LeaveRecord] = []
        permissions: List[PermissionRecord] = []
        failures = 0
        for d, outcome in zip(dates, outcomes):
            if not outcome.ok:
                failures += 1
                continue
            row = find_daily_row(outcome.value or (), employee_id)
            if row is None:
                continue
            if row.upstream_status == AttendanceStatus.LEAVE:
                leaves.append(LeaveRecord(employee_id=employee_id, leave_date=d, status=RequestStatus.APPROVED))
            elif row.upstream_status == AttendanceStatus.PERMISSION:
                permissions.append(
                    PermissionRecord(
                        employee_id=employee_id,
                        permission_date=d,
                        start_time=None,
                        end_time=None,
                        status=RequestStatus.APPROVED,
                    )
                )

        if failures:
            logger.warning("Daily lookups failed for %s of %s dates (%s)", failures, len(dates), employee_id)
        lookup_failure = f"{failures} of {len(dates)} daily lookups failed" if dates and failures == len(dates) else ""
        return leaves, permissions, lookup_failure
