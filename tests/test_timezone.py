from datetime import date, datetime, timedelta, timezone

import pytest

from radioinfo.utils.timezone import (
    DateFormatError,
    calculate_time_window,
    format_display_time,
    format_query_date,
    parse_iso8601_to_utc,
    reattach_year,
    surrounding_dates,
    to_local,
)
from tests.conftest import STOCKHOLM, stockholm


def test_parse_iso8601_accepts_zulu_and_offsets():
    assert parse_iso8601_to_utc("2025-01-26T10:00:00Z") == datetime(2025, 1, 26, 10, tzinfo=timezone.utc)
    assert parse_iso8601_to_utc("2025-01-26T11:00:00+01:00") == datetime(2025, 1, 26, 10, tzinfo=timezone.utc)


def test_parse_iso8601_rejects_garbage():
    with pytest.raises(DateFormatError):
        parse_iso8601_to_utc("yesterday-ish")


@pytest.mark.parametrize(
    ("utc", "expected"),
    [
        ("2025-01-26T10:00:00Z", "01-26 11:00"),  # winter, +01:00
        ("2025-07-26T10:00:00Z", "07-26 12:00"),  # summer, +02:00
        ("2024-12-31T23:30:00Z", "01-01 00:30"),  # crosses into the new year
    ],
)
def test_display_time_is_stockholm_local(utc, expected):
    assert format_display_time(to_local(parse_iso8601_to_utc(utc), STOCKHOLM)) == expected


def test_surrounding_dates_use_local_calendar_day():
    # 23:30 UTC on Jan 31 is already Feb 1 in Stockholm
    now = datetime(2025, 1, 31, 23, 30, tzinfo=timezone.utc)

    today, tomorrow, yesterday = surrounding_dates(now, STOCKHOLM)

    assert (today, tomorrow, yesterday) == (date(2025, 2, 1), date(2025, 2, 2), date(2025, 1, 31))
    assert format_query_date(today) == "2025-02-01"


def test_time_window_spans_absolute_hours_across_dst():
    # DST starts 2025-03-30 02:00 local; the window is 24 real hours wide
    now = stockholm(2025, 3, 30, 12, 0)

    start, end = calculate_time_window(now, 12)

    assert end - start == timedelta(hours=24)
    assert start.tzinfo is timezone.utc
    assert start == datetime(2025, 3, 29, 22, 0, tzinfo=timezone.utc)
    assert end == datetime(2025, 3, 30, 22, 0, tzinfo=timezone.utc)


def test_reattach_year_stamps_given_year():
    assert reattach_year("12-31 23:30", 2025, STOCKHOLM) == stockholm(2025, 12, 31, 23, 30)


def test_reattach_year_rejects_bad_display_time():
    with pytest.raises(DateFormatError):
        reattach_year("31-12 23:30", 2025, STOCKHOLM)
