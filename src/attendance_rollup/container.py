from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from .attendance.calculator import MonthlyRollUpCalculator
from .attendance.factory import StatusRuleFactory
from .attendance.resolver import DailyStatusResolver
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_FETCH_TIMEOUT_SECONDS, DEFAULT_MAX_CONCURRENCY, DEFAULT_TOTAL_DAYS
from .database.connection import DBConfig, SettingsDatabase
from .monthly_settings.http_monthly_settings_repository import HttpMonthlySettingsRepository
from .monthly_settings.mysql_monthly_settings_repository import MySQLMonthlySettingsRepository
from .monthly_settings.repository import MonthlySettingsRepository
from .monthly_settings.service import MonthlySettingsService
from .records.fetcher import RawRecordFetcher, RequestLookupMode
from .records.http_record_source import HttpRecordSource
from .records.repository import RecordSource
from .reports.service import AttendanceReportService


@dataclass(frozen=True)
class Container:
    record_source: RecordSource
    monthly_settings_repo: MonthlySettingsRepository
    settings_db: Optional[SettingsDatabase]

    fetcher: RawRecordFetcher
    resolver: DailyStatusResolver
    calculator: MonthlyRollUpCalculator
    monthly_settings_service: MonthlySettingsService
    report_service: AttendanceReportService


def build_container(
    settings: Any,
    *,
    record_source: Optional[RecordSource] = None,
    monthly_settings_repo: Optional[MonthlySettingsRepository] = None,
    clock=now_local,
) -> Container:
    """Wire services from a settings module (or any object with the same attributes)."""

    timeout = float(getattr(settings, "FETCH_TIMEOUT_SECONDS", DEFAULT_FETCH_TIMEOUT_SECONDS))
    max_concurrency = int(getattr(settings, "MAX_CONCURRENCY", DEFAULT_MAX_CONCURRENCY))
    base_url = str(getattr(settings, "RECORDS_API_BASE", ""))

    settings_db = None
    if monthly_settings_repo is None:
        backend = str(getattr(settings, "MONTHLY_SETTINGS_BACKEND", "mysql")).lower()
        if backend == "http":
            monthly_settings_repo = HttpMonthlySettingsRepository(base_url, timeout=timeout)
        else:
            settings_db = SettingsDatabase(DBConfig.from_settings(getattr(settings, "DB_CONFIG", None)))
            monthly_settings_repo = MySQLMonthlySettingsRepository(settings_db)

    if record_source is None:
        record_source = HttpRecordSource(base_url, timeout=timeout)

    late_cutoff = datetime.strptime(str(getattr(settings, "LATE_CUTOFF", "09:00")), "%H:%M").time()
    resolver = DailyStatusResolver(factory=StatusRuleFactory(late_cutoff=late_cutoff))
    calculator = MonthlyRollUpCalculator()

    fetcher = RawRecordFetcher(
        record_source,
        timeout=timeout,
        max_concurrency=max_concurrency,
        work_log_required=bool(getattr(settings, "WORK_LOG_REQUIRED", True)),
        request_lookup_mode=RequestLookupMode(str(getattr(settings, "REQUEST_LOOKUP_MODE", "monthly")).lower()),
    )
    monthly_settings_service = MonthlySettingsService(
        monthly_settings_repo,
        default_total_days=int(getattr(settings, "DEFAULT_TOTAL_DAYS", DEFAULT_TOTAL_DAYS)),
    )
    report_service = AttendanceReportService(
        record_source,
        fetcher,
        monthly_settings_service,
        resolver=resolver,
        calculator=calculator,
        max_concurrency=max_concurrency,
        timeout=timeout,
        clock=clock,
    )

    return Container(
        record_source=record_source,
        monthly_settings_repo=monthly_settings_repo,
        settings_db=settings_db,
        fetcher=fetcher,
        resolver=resolver,
        calculator=calculator,
        monthly_settings_service=monthly_settings_service,
        report_service=report_service,
    )
