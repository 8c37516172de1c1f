from datetime import date, datetime, time

import pytest

from attendance_rollup.common.datetime_utils import (
    hours_between,
    month_date_range,
    parse_record_date,
    parse_time_of_day,
)
from attendance_rollup.common.numbers import round2, to_float, to_hours
from attendance_rollup.common.validators import require_month, require_total_days, require_year
from attendance_rollup.core.enums import RequestStatus
from attendance_rollup.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "value, expected",
    [
        ("09:15", time(9, 15)),
        ("9:05:30", time(9, 5, 30)),
        ("17:45:00.123", time(17, 45)),
        ("2025-03-03T08:59:00", time(8, 59)),
        ("2025-03-03 10:01:02", time(10, 1, 2)),
        (datetime(2025, 3, 3, 7, 30), time(7, 30)),
    ],
)
def test_parse_time_of_day_accepts_bare_and_full_timestamps(value, expected):
    assert parse_time_of_day(value) == expected


@pytest.mark.parametrize("value", [None, "", "-", "--", "None", "25:00", "half past nine", "12"])
def test_parse_time_of_day_fails_closed(value):
    assert parse_time_of_day(value) is None


def test_month_range_current_month_stops_at_today():
    days = month_date_range(3, 2025, today=date(2025, 3, 21))

    assert days[0] == date(2025, 3, 1)
    assert days[-1] == date(2025, 3, 21)
    assert len(days) == 21


def test_month_range_past_month_is_complete_and_future_is_empty():
    assert len(month_date_range(2, 2024, today=date(2025, 3, 21))) == 29
    assert month_date_range(4, 2025, today=date(2025, 3, 21)) == []


def test_parse_record_date_reads_display_dates_with_month_context():
    assert parse_record_date("2025-03-07") == date(2025, 3, 7)
    assert parse_record_date("2025-03-07T00:00:00Z") == date(2025, 3, 7)
    assert parse_record_date("Fri, Mar 07", month=3, year=2025) == date(2025, 3, 7)
    assert parse_record_date("Fri, Mar 07") is None
    assert parse_record_date("Feb 30", month=2, year=2025) is None


def test_parse_record_date_rejects_display_dates_from_another_month():
    assert parse_record_date("Tue, Apr 01", month=3, year=2025) is None
    assert parse_record_date("Mar 31", month=3, year=2025) == date(2025, 3, 31)
    assert parse_record_date("Mon Mar 03", month=3, year=2025) == date(2025, 3, 3)


@pytest.mark.parametrize("value", ["03/15/2025", "15.03.2025", "day 15", "Mar"])
def test_parse_record_date_does_not_guess_from_other_shapes(value):
    assert parse_record_date(value, month=3, year=2025) is None


def test_numbers_never_propagate_nan():
    assert to_float("7.5h") == 7.5
    assert to_float("abc") == 0.0
    assert to_float(float("nan")) == 0.0
    assert to_float(None) == 0.0
    assert to_hours(-3) == 0.0
    assert round2(2.456) == 2.46


def test_hours_between_is_zero_for_missing_or_reversed_times():
    assert hours_between(time(9, 0), time(11, 30)) == 2.5
    assert hours_between(None, time(11, 30)) == 0.0
    assert hours_between(time(12, 0), time(11, 0)) == 0.0


def test_request_status_aliases():
    assert RequestStatus.parse("approve") == RequestStatus.APPROVED
    assert RequestStatus.parse(" APPROVED ") == RequestStatus.APPROVED
    assert RequestStatus.parse("Pending Team Lead") == RequestStatus.PENDING
    assert RequestStatus.parse("Rejected by manager") == RequestStatus.REJECTED
    assert RequestStatus.parse(None) == RequestStatus.PENDING


def test_validators_reject_out_of_range_input():
    assert require_month("3") == 3
    assert require_year(2025) == 2025
    assert require_total_days(31) == 31

    with pytest.raises(ValidationError):
        require_month(13)
    with pytest.raises(ValidationError):
        require_year(25)
    with pytest.raises(ValidationError):
        require_total_days(0)
    with pytest.raises(ValidationError):
        require_month("march")
