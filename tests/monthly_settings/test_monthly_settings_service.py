import httpx
import pytest

from attendance_rollup.core.exceptions import StorageError, UpstreamError, ValidationError
from attendance_rollup.monthly_settings.http_monthly_settings_repository import HttpMonthlySettingsRepository
from attendance_rollup.monthly_settings.service import MonthlySettingsService
from fakes import InMemoryMonthlySettings


def test_missing_setting_defaults_to_28_days(settings_repo):
    service = MonthlySettingsService(settings_repo)

    setting = service.get(month=3, year=2025)

    assert setting.total_days == 28
    assert service.total_days(month=3, year=2025) == 28


def test_saved_setting_is_returned(settings_repo):
    service = MonthlySettingsService(settings_repo)

    service.update(month="3", year="2025", total_days="22")

    assert service.get(month=3, year=2025).to_dict() == {"month": 3, "year": 2025, "totalDays": 22}
    assert service.total_days(month=4, year=2025) == 28


@pytest.mark.parametrize("total_days", [0, 32, -1, "abc", None])
def test_update_rejects_out_of_range_total_days(settings_repo, total_days):
    service = MonthlySettingsService(settings_repo)

    with pytest.raises(ValidationError):
        service.update(month=3, year=2025, total_days=total_days)

    assert settings_repo.get(month=3, year=2025) is None


def test_get_validates_month_and_year(settings_repo):
    service = MonthlySettingsService(settings_repo)

    with pytest.raises(ValidationError):
        service.get(month=0, year=2025)
    with pytest.raises(ValidationError):
        service.get(month=3, year=25)


@pytest.mark.parametrize("error", [StorageError("db down"), UpstreamError("HTTP 503", status_code=503)])
def test_total_days_falls_back_when_store_is_unavailable(error):
    service = MonthlySettingsService(InMemoryMonthlySettings(error=error), default_total_days=26)

    assert service.total_days(month=3, year=2025) == 26
    with pytest.raises(type(error)):
        service.get(month=3, year=2025)


def _http_repo(handler):
    return HttpMonthlySettingsRepository("http://records.test", timeout=2.0, transport=httpx.MockTransport(handler))


def test_http_repository_reads_total_days():
    def handler(request: httpx.Request) -> httpx.Response:
        assert dict(request.url.params) == {"month": "3", "year": "2025"}
        return httpx.Response(200, json={"month": 3, "year": 2025, "totalDays": 23})

    assert _http_repo(handler).get(month=3, year=2025).total_days == 23


@pytest.mark.parametrize(
    "response",
    [httpx.Response(404, json={"message": "not found"}), httpx.Response(200, json={"totalDays": 0})],
)
def test_http_repository_treats_missing_setting_as_none(response):
    assert _http_repo(lambda request: response).get(month=3, year=2025) is None


def test_http_repository_server_error_is_upstream_error():
    repo = _http_repo(lambda request: httpx.Response(500))

    with pytest.raises(UpstreamError):
        repo.get(month=3, year=2025)
    assert MonthlySettingsService(repo).total_days(month=3, year=2025) == 28


def test_http_repository_posts_camel_case_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = request.read()
        return httpx.Response(200, json={"success": True})

    setting = _http_repo(handler).upsert(month=3, year=2025, total_days=24)

    assert seen["method"] == "POST"
    assert b'"totalDays"' in seen["body"] and b"24" in seen["body"]
    assert setting.total_days == 24
