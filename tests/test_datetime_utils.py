from datetime import date, datetime

import pytest
import pytz

from fin_dashboard.calendars.dto import EventTime
from fin_dashboard.calendars.utils.datetime_utils import (
    format_day_header,
    format_day_key,
    format_event_time,
    get_timezone,
    local_day,
    localize,
    parse_day_key,
    parse_google_calendar_datetime,
    to_utc_iso,
)

from conftest import NEW_YORK, ny


@pytest.mark.parametrize("day", [date(2025, 1, 8), date(2024, 2, 29), date(2025, 12, 31)])
def test_day_key_round_trip(day):
    assert parse_day_key(format_day_key(day)) == day


def test_day_key_format():
    assert format_day_key(date(2025, 1, 8)) == "01/08/2025"


def test_day_header_format():
    assert format_day_header(date(2025, 1, 6)) == "Monday, January 6"


def test_parse_google_datetime_with_offset():
    parsed = parse_google_calendar_datetime({"dateTime": "2025-01-08T15:00:00-05:00"})
    assert parsed.date_time == ny(2025, 1, 8, 15)
    assert not parsed.is_all_day


def test_parse_google_datetime_utc_suffix():
    parsed = parse_google_calendar_datetime({"dateTime": "2025-01-08T20:00:00Z"})
    assert parsed.date_time == datetime(2025, 1, 8, 20, tzinfo=pytz.UTC)


def test_parse_google_all_day():
    parsed = parse_google_calendar_datetime({"date": "2025-01-10"})
    assert parsed.day == date(2025, 1, 10)
    assert parsed.is_all_day
    assert parsed.value == date(2025, 1, 10)


def test_parse_google_missing_values():
    assert parse_google_calendar_datetime({}).value is None
    assert parse_google_calendar_datetime(None).value is None


def test_to_utc_iso():
    assert to_utc_iso(ny(2025, 1, 6)) == "2025-01-06T05:00:00+00:00"


def test_to_utc_iso_rejects_naive():
    with pytest.raises(ValueError):
        to_utc_iso(datetime(2025, 1, 6))


def test_localize_naive_and_aware():
    tz = get_timezone(NEW_YORK)
    assert localize(datetime(2025, 1, 8, 9), tz) == ny(2025, 1, 8, 9)
    assert localize(datetime(2025, 1, 8, 14, tzinfo=pytz.UTC), tz).hour == 9


def test_local_day_crosses_midnight():
    tz = get_timezone(NEW_YORK)
    # 03:00 UTC on the 13th is still the evening of the 12th in New York
    assert local_day(datetime(2025, 1, 13, 3, tzinfo=pytz.UTC), tz) == date(2025, 1, 12)
    assert local_day(date(2025, 1, 13), tz) == date(2025, 1, 13)


def test_format_event_time():
    tz = get_timezone(NEW_YORK)
    assert format_event_time(EventTime(date_time=datetime(2025, 1, 8, 20, tzinfo=pytz.UTC)), tz) == "03:00 PM"
    assert format_event_time(EventTime(day=date(2025, 1, 8)), tz) == "All day"
    assert format_event_time(EventTime(), tz) == "No date"


def test_unknown_timezone():
    with pytest.raises(pytz.UnknownTimeZoneError):
        get_timezone("Mars/Olympus_Mons")
