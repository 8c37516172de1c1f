from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import date
from typing import Any, AsyncIterator, Dict, Optional, Sequence, Tuple
from urllib.parse import quote

import httpx

from ..core.constants import DEFAULT_FETCH_TIMEOUT_SECONDS
from ..core.exceptions import UpstreamError
from . import normalize
from .model import DailyAttendanceRow, EmployeeProfile, LeaveRecord, OvertimeRecord, PermissionRecord, WorkLogEntry
from .repository import RecordSource

logger = logging.getLogger(__name__)

# Client opened by HttpRecordSource.session(); tasks started inside the session inherit it.
_session_client: ContextVar[Optional[Tuple["HttpRecordSource", httpx.AsyncClient]]] = ContextVar(
    "records_session_client", default=None
)


@dataclass(frozen=True)
class Endpoints:
    work_log: str = "/api/employees/{employee_id}"
    employee: str = "/api/employees/{employee_id}"
    leaves: str = "/api/leave-request"
    permissions: str = "/api/permission-request"
    overtime: str = "/api/overtime-summary"
    daily_attendance: str = "/api/daily-attendance"


class HttpRecordSource(RecordSource):
    """RecordSource backed by the JSON records API.

    Calls made inside ``async with source.session():`` share one client and
    its connection pool; calls outside a session open a client each.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        endpoints: Optional[Endpoints] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = float(timeout)
        self._endpoints = endpoints or Endpoints()
        self._headers = dict(headers or {})
        self._transport = transport

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            headers=self._headers,
            transport=self._transport,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator["HttpRecordSource"]:
        current = _session_client.get()
        if current is not None and current[0] is self:
            yield self
            return

        async with self._new_client() as client:
            token = _session_client.set((self, client))
            try:
                yield self
            finally:
                _session_client.reset(token)

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Any:
        url = f"{self._base_url}{path}"
        logger.debug("GET %s params=%s", url, params)

        try:
            current = _session_client.get()
            if current is not None and current[0] is self:
                resp = await current[1].get(url, params=params)
            else:
                async with self._new_client() as client:
                    resp = await client.get(url, params=params)
            resp.raise_for_status()
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Timed out calling {url}", url=url) from e
        except httpx.HTTPStatusError as e:
            status = getattr(e.response, "status_code", None)
            raise UpstreamError(f"{url} returned HTTP {status}", url=url, status_code=status) from e
        except httpx.RequestError as e:
            raise UpstreamError(f"Network error calling {url}: {e}", url=url) from e

        try:
            return resp.json()
        except ValueError as json_err:
            raise UpstreamError(f"Error decoding JSON from {url}: {json_err}", url=url) from json_err

    @staticmethod
    def _month_params(employee_id: str, month: int, year: int) -> Dict[str, Any]:
        return {"employeeId": employee_id, "month": month, "year": year}

    def _employee_path(self, template: str, employee_id: str) -> str:
        return template.format(employee_id=quote(employee_id, safe=""))

    async def get_work_log(self, *, employee_id: str, month: int, year: int) -> Sequence[WorkLogEntry]:
        path = self._employee_path(self._endpoints.work_log, employee_id)
        payload = await self._get_json(path, {"month": month, "year": year})
        return normalize.work_log_entries(payload, month=month, year=year)

    async def get_leaves(self, *, employee_id: str, month: int, year: int) -> Sequence[LeaveRecord]:
        payload = await self._get_json(self._endpoints.leaves, self._month_params(employee_id, month, year))
        return normalize.leave_records(payload, employee_id=employee_id, month=month, year=year)

    async def get_permissions(self, *, employee_id: str, month: int, year: int) -> Sequence[PermissionRecord]:
        payload = await self._get_json(self._endpoints.permissions, self._month_params(employee_id, month, year))
        return normalize.permission_records(payload, employee_id=employee_id, month=month, year=year)

    async def get_overtime(self, *, employee_id: str, month: int, year: int) -> Sequence[OvertimeRecord]:
        payload = await self._get_json(self._endpoints.overtime, self._month_params(employee_id, month, year))
        return normalize.overtime_records(payload, employee_id=employee_id, month=month, year=year)

    async def get_employee(self, *, employee_id: str) -> EmployeeProfile:
        payload = await self._get_json(self._employee_path(self._endpoints.employee, employee_id), {})
        return normalize.employee_profile(payload, employee_id=employee_id)

    async def get_daily_attendance(self, *, work_date: date) -> Sequence[DailyAttendanceRow]:
        payload = await self._get_json(self._endpoints.daily_attendance, {"date": work_date.strftime("%Y-%m-%d")})
        return normalize.daily_attendance_rows(payload)
