"""
Calendar Datetime Utilities

This module provides datetime parsing and formatting utilities:
- get_timezone: Resolve a time zone name
- localize: Attach or convert a datetime to a time zone
- to_utc_iso: Convert a datetime to UTC ISO format for the Google Calendar API
- parse_google_calendar_datetime: Parse the Google Calendar start/end format
- local_day: Calendar date of an event time in a time zone
- format_day_key / parse_day_key: Day bucket keys (MM/DD/YYYY)
- format_day_header / format_event_time: Display strings
"""

from datetime import date, datetime, time
from typing import Optional, Union

import pytz

from fin_dashboard.calendars.constants import WEEK_SETTINGS
from fin_dashboard.calendars.dto import EventTime


def get_timezone(name: str) -> pytz.BaseTzInfo:
    """
    Resolve a time zone name such as "America/New_York".

    Raises:
        pytz.UnknownTimeZoneError: if the name is not a known zone
    """
    return pytz.timezone(name)


def localize(dt: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """
    Express a datetime in the given time zone.

    Naive datetimes are taken to be wall-clock time in ``tz``.
    """
    if dt.tzinfo is None:
        return tz.localize(dt)
    return dt.astimezone(tz)


def start_of_day(day: date, tz: pytz.BaseTzInfo) -> datetime:
    """Midnight at the beginning of ``day`` in ``tz``."""
    return tz.localize(datetime.combine(day, time.min))


def to_utc_iso(dt: datetime) -> str:
    """
    Convert a timezone-aware datetime to UTC ISO format for Google Calendar API.

    Args:
        dt: timezone-aware datetime

    Returns:
        UTC ISO format string
    """
    if dt.tzinfo is None:
        raise ValueError("to_utc_iso requires a timezone-aware datetime")
    return dt.astimezone(pytz.UTC).isoformat()


def parse_google_calendar_datetime(date_dict: Optional[dict]) -> EventTime:
    """
    Parse Google Calendar start/end format.

    Args:
        date_dict: {"dateTime": "...", "timeZone": "..."} or {"date": "YYYY-MM-DD"}

    Returns:
        EventTime; both fields empty when the dict carries neither key
    """
    if not date_dict:
        return EventTime()

    if date_dict.get("dateTime"):
        dt = datetime.fromisoformat(date_dict["dateTime"].replace("Z", "+00:00"))
        if dt.tzinfo is None and date_dict.get("timeZone"):
            dt = get_timezone(date_dict["timeZone"]).localize(dt)
        return EventTime(date_time=dt)

    if date_dict.get("date"):
        return EventTime(day=date.fromisoformat(date_dict["date"]))

    return EventTime()


def to_instant(value: Union[datetime, date], tz: pytz.BaseTzInfo) -> datetime:
    """Aware datetime for an event time value; dates map to local midnight."""
    if isinstance(value, datetime):
        return localize(value, tz)
    return start_of_day(value, tz)


def local_day(value: Union[datetime, date], tz: pytz.BaseTzInfo) -> date:
    """Calendar date of an event time value as seen in ``tz``."""
    if isinstance(value, datetime):
        return localize(value, tz).date()
    return value


def format_day_key(day: date) -> str:
    return day.strftime(WEEK_SETTINGS.DAY_KEY_FORMAT)


def parse_day_key(key: str) -> date:
    return datetime.strptime(key, WEEK_SETTINGS.DAY_KEY_FORMAT).date()


def format_day_header(day: date) -> str:
    """Format a day like "Monday, January 6"."""
    return day.strftime(WEEK_SETTINGS.DAY_HEADER_FORMAT).format(day=day.day)


def format_event_time(event_time: EventTime, tz: pytz.BaseTzInfo) -> str:
    """
    Format an event start for display in ``tz``.

    Returns:
        "03:00 PM" style time, "All day" for date-only events, "No date" when empty
    """
    if event_time.date_time is not None:
        return localize(event_time.date_time, tz).strftime(WEEK_SETTINGS.EVENT_TIME_FORMAT)
    if event_time.day is not None:
        return "All day"
    return "No date"
