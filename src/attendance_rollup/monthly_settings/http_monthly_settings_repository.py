from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..common.numbers import to_float
from ..core.constants import DEFAULT_FETCH_TIMEOUT_SECONDS
from ..core.exceptions import UpstreamError
from .model import MonthlySetting
from .repository import MonthlySettingsRepository

logger = logging.getLogger(__name__)


class HttpMonthlySettingsRepository(MonthlySettingsRepository):
    """Monthly settings kept by the remote records API."""

    def __init__(
        self,
        base_url: str,
        *,
        path: str = "/api/monthly-settings",
        timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._url = f"{base_url.rstrip('/')}{path}"
        self._timeout = float(timeout)
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=httpx.Timeout(self._timeout), transport=self._transport)

    def get(self, *, month: int, year: int) -> Optional[MonthlySetting]:
        try:
            with self._client() as client:
                resp = client.get(self._url, params={"month": month, "year": year})
                if resp.status_code == 404:
                    return None
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamError(f"Monthly settings unavailable: {e}", url=self._url) from e

        total = int(to_float(data.get("totalDays") if isinstance(data, dict) else None))
        if total <= 0:
            return None
        return MonthlySetting(month=int(month), year=int(year), total_days=total)

    def upsert(self, *, month: int, year: int, total_days: int) -> MonthlySetting:
        body = {"month": int(month), "year": int(year), "totalDays": int(total_days)}
        try:
            with self._client() as client:
                resp = client.post(self._url, json=body)
                resp.raise_for_status()
        except httpx.HTTPError as e:
            status = getattr(getattr(e, "response", None), "status_code", None)
            raise UpstreamError(f"Saving monthly settings failed: {e}", url=self._url, status_code=status) from e
        logger.info("Monthly settings %s/%s saved remotely (totalDays=%s)", month, year, total_days)
        return MonthlySetting(month=int(month), year=int(year), total_days=int(total_days))
