from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from typing import Callable, List, Optional, Sequence

from ..attendance.calculator import MonthlyRollUpCalculator
from ..attendance.resolver import DailyStatusResolver, is_missed_day
from ..attendance.rules.base import DayContext
from ..common.datetime_utils import now_local
from ..common.outcome import capture
from ..common.validators import require_month, require_non_empty, require_year
from ..core.constants import DEFAULT_FETCH_TIMEOUT_SECONDS, DEFAULT_MAX_CONCURRENCY
from ..core.enums import AttendanceStatus
from ..core.exceptions import PrimaryFetchError, ValidationError
from ..monthly_settings.service import MonthlySettingsService
from ..records.fetcher import RawRecordFetcher
from ..records.model import EmployeeProfile, WorkLogEntry
from ..records.repository import RecordSource
from .cache import EmployeeProfileCache
from .model import DailyAttendanceLine, DailyReport, EmployeeMonthlyReport

logger = logging.getLogger(__name__)


class AttendanceReportService:
    """Use case: monthly/daily attendance reports for the dashboards and exports."""

    def __init__(
        self,
        source: RecordSource,
        fetcher: RawRecordFetcher,
        settings: MonthlySettingsService,
        *,
        resolver: Optional[DailyStatusResolver] = None,
        calculator: Optional[MonthlyRollUpCalculator] = None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._source = source
        self._fetcher = fetcher
        self._settings = settings
        self._resolver = resolver or DailyStatusResolver()
        self._calculator = calculator or MonthlyRollUpCalculator()
        self._max_concurrency = max(int(max_concurrency), 1)
        self._timeout = float(timeout)
        self._clock = clock

    async def _total_days(self, month: int, year: int) -> int:
        return await asyncio.to_thread(self._settings.total_days, month=month, year=year)

    async def _profile(self, employee_id: str, cache: EmployeeProfileCache) -> EmployeeProfile:
        async def load(eid: str) -> EmployeeProfile:
            outcome = await capture(
                self._source.get_employee(employee_id=eid), timeout=self._timeout, label=f"employee {eid}"
            )
            if not outcome.ok:
                raise LookupError(outcome.reason)
            return outcome.value

        try:
            return await cache.get_or_load(employee_id, load)
        except LookupError:
            return EmployeeProfile(employee_id=employee_id)

    async def _build(
        self,
        employee_id: str,
        month: int,
        year: int,
        *,
        today: date,
        total_days: int,
        cache: EmployeeProfileCache,
    ) -> EmployeeMonthlyReport:
        profile_task = asyncio.ensure_future(self._profile(employee_id, cache))
        try:
            raw = await self._fetcher.fetch(employee_id=employee_id, month=month, year=year, today=today)
            profile = await profile_task
        finally:
            if not profile_task.done():
                profile_task.cancel()
                await asyncio.gather(profile_task, return_exceptions=True)

        days = self._resolver.resolve_month(raw, today=today)
        summary = self._calculator.summarize(days, raw, total_days=total_days)
        logger.debug("Summary %s %s-%02d: %s", employee_id, year, month, summary)
        return EmployeeMonthlyReport(
            employee_id=employee_id,
            month=month,
            year=year,
            summary=summary,
            days=tuple(days),
            profile=profile,
            degraded=tuple(kind.value for kind in raw.failed),
        )

    def _failed(self, employee_id: str, month: int, year: int, total_days: int, reason: str) -> EmployeeMonthlyReport:
        return EmployeeMonthlyReport(
            employee_id=employee_id,
            month=month,
            year=year,
            summary=self._calculator.empty(total_days),
            error=reason,
        )

    async def employee_report(self, *, employee_id: str, month, year) -> EmployeeMonthlyReport:
        """Single-employee view. PrimaryFetchError propagates to the caller."""

        employee_id = require_non_empty(employee_id, "employeeId")
        month = require_month(month)
        year = require_year(year)

        cache = EmployeeProfileCache()
        try:
            total_days = await self._total_days(month, year)
            async with self._source.session():
                return await self._build(
                    employee_id, month, year, today=self._clock().date(), total_days=total_days, cache=cache
                )
        finally:
            await cache.close()

    async def batch_report(self, *, employee_ids: Sequence[str], month, year) -> List[EmployeeMonthlyReport]:
        """Reports for many employees, one per requested id in request order.

        One employee's failure never affects the others. A repeated id gets
        its own row but shares the profile lookup through the batch cache.
        """

        month = require_month(month)
        year = require_year(year)
        ids = [str(e).strip() for e in employee_ids if e and str(e).strip()]
        if not ids:
            raise ValidationError("employeeId is required")

        today = self._clock().date()
        total_days = await self._total_days(month, year)
        cache = EmployeeProfileCache()
        sem = asyncio.Semaphore(self._max_concurrency)

        async def one(employee_id: str) -> EmployeeMonthlyReport:
            async with sem:
                try:
                    return await self._build(
                        employee_id, month, year, today=today, total_days=total_days, cache=cache
                    )
                except PrimaryFetchError as e:
                    return self._failed(employee_id, month, year, total_days, str(e))
                except Exception as e:
                    logger.exception("Attendance roll-up failed for %s", employee_id)
                    return self._failed(
                        employee_id, month, year, total_days, f"unable to compute attendance for this employee ({e})"
                    )

        try:
            async with self._source.session():
                reports = await asyncio.gather(*(one(e) for e in ids))
        finally:
            await cache.close()

        failed = sum(1 for r in reports if r.error)
        logger.info("Batch %s-%02d: %d employees, %d failed", year, month, len(reports), failed)
        return list(reports)

    async def daily_report(
        self,
        *,
        work_date: date,
        search: Optional[str] = None,
        work_mode: Optional[str] = None,
        attendance_status: Optional[str] = None,
    ) -> DailyReport:
        async with self._source.session():
            rows = await self._source.get_daily_attendance(work_date=work_date)
        today = self._clock().date()

        lines: List[DailyAttendanceLine] = []
        for row in rows:
            entry = WorkLogEntry(
                work_date=work_date,
                check_in=row.check_in,
                check_out=row.check_out,
                regular_hours=row.total_hours,
                overtime_hours=row.overtime_hours,
            )
            decision = self._resolver.resolve(
                DayContext(
                    work_date=work_date,
                    today=today,
                    entry=entry,
                    approved_leave=row.upstream_status == AttendanceStatus.LEAVE,
                    approved_permission=row.upstream_status == AttendanceStatus.PERMISSION,
                )
            )
            status = decision.status
            # An explicit upstream "Late" is kept.
            if status == AttendanceStatus.PRESENT and row.upstream_status == AttendanceStatus.LATE:
                status = AttendanceStatus.LATE

            lines.append(
                DailyAttendanceLine(
                    employee_id=row.employee_id,
                    name=row.name,
                    designation=row.designation,
                    work_mode=row.work_mode,
                    status=status,
                    missed=is_missed_day(entry, work_date, today),
                    check_in=row.check_in.strftime("%H:%M:%S") if row.check_in else "",
                    check_out=row.check_out.strftime("%H:%M:%S") if row.check_out else "",
                    total_hours=row.total_hours,
                    overtime_hours=row.overtime_hours,
                )
            )

        needle = (search or "").strip().lower()
        if needle:
            lines = [
                line
                for line in lines
                if needle in line.name.lower() or needle in line.employee_id.lower() or needle in line.designation.lower()
            ]
        if work_mode:
            lines = [line for line in lines if line.work_mode == work_mode]
        if attendance_status:
            lines = [line for line in lines if line.status.value == attendance_status]

        return DailyReport(work_date=work_date, lines=lines)
