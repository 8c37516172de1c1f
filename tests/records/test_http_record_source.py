import asyncio
from datetime import date, time

import httpx
import pytest

from attendance_rollup.core.enums import RequestStatus
from attendance_rollup.core.exceptions import UpstreamError
from attendance_rollup.records.http_record_source import HttpRecordSource

BASE = "http://records.test"


def _source(handler):
    return HttpRecordSource(BASE, timeout=2.0, transport=httpx.MockTransport(handler))


@pytest.mark.anyio
async def test_work_log_request_and_parsing():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(
            200,
            json={"dailyWorkLog": [{"date": "2025-03-03", "checkIn": "08:58", "checkOut": "17:00", "hours": 8}]},
        )

    entries = await _source(handler).get_work_log(employee_id="EMP1", month=3, year=2025)

    assert seen["path"] == "/api/employees/EMP1"
    assert seen["params"] == {"month": "3", "year": "2025"}
    assert entries[0].check_in == time(8, 58)


@pytest.mark.anyio
async def test_leave_request_query_uses_month_params():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[{"date": "2025-03-07", "status": "Approve"}])

    records = await _source(handler).get_leaves(employee_id="EMP1", month=3, year=2025)

    assert seen["path"] == "/api/leave-request"
    assert seen["params"] == {"employeeId": "EMP1", "month": "3", "year": "2025"}
    assert records[0].leave_date == date(2025, 3, 7)
    assert records[0].status == RequestStatus.APPROVED


@pytest.mark.anyio
async def test_server_error_becomes_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "boom"})

    with pytest.raises(UpstreamError) as exc_info:
        await _source(handler).get_overtime(employee_id="EMP1", month=3, year=2025)

    assert exc_info.value.status_code == 500


@pytest.mark.anyio
async def test_invalid_json_becomes_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    with pytest.raises(UpstreamError):
        await _source(handler).get_permissions(employee_id="EMP1", month=3, year=2025)


@pytest.mark.anyio
async def test_network_error_becomes_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError):
        await _source(handler).get_employee(employee_id="EMP1")


@pytest.mark.anyio
async def test_daily_attendance_passes_iso_date():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"employees": [{"id": "EMP1", "attendanceStatus": "Permission"}]})

    rows = await _source(handler).get_daily_attendance(work_date=date(2025, 3, 4))

    assert seen["params"] == {"date": "2025-03-04"}
    assert rows[0].employee_id == "EMP1"


@pytest.mark.anyio
async def test_calls_inside_a_session_share_one_client(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[])

    source = _source(handler)
    opened = []
    new_client = source._new_client

    def counting_client():
        client = new_client()
        opened.append(client)
        return client

    monkeypatch.setattr(source, "_new_client", counting_client)

    async with source.session():
        async with source.session():
            await source.get_leaves(employee_id="EMP1", month=3, year=2025)
        await asyncio.gather(*(source.get_daily_attendance(work_date=date(2025, 3, d)) for d in range(1, 6)))

    assert len(opened) == 1
    assert opened[0].is_closed

    await source.get_overtime(employee_id="EMP1", month=3, year=2025)
    assert len(opened) == 2


@pytest.mark.anyio
async def test_session_errors_still_become_upstream_errors():
    source = _source(lambda request: httpx.Response(503))

    async with source.session():
        with pytest.raises(UpstreamError) as exc_info:
            await source.get_work_log(employee_id="EMP1", month=3, year=2025)

    assert exc_info.value.status_code == 503
