from __future__ import annotations

import pytest

from attendance_rollup.core.exceptions import UpstreamError
from fakes import FakeRecordSource, InMemoryMonthlySettings


# Make anyio run on asyncio only.
@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def source() -> FakeRecordSource:
    return FakeRecordSource()


@pytest.fixture
def settings_repo() -> InMemoryMonthlySettings:
    return InMemoryMonthlySettings()


@pytest.fixture
def upstream_500() -> UpstreamError:
    return UpstreamError("records API returned HTTP 500", status_code=500)
