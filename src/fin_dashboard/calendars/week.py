"""
Week Aggregator

Computes the Monday-anchored week window for "now" and buckets normalized
calendar events by local calendar day.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, Iterable, List

from fin_dashboard.calendars.constants import WEEK_SETTINGS
from fin_dashboard.calendars.dto import CalendarEvent, WeekWindow
from fin_dashboard.calendars.utils.datetime_utils import (
    format_day_key,
    get_timezone,
    local_day,
    localize,
    start_of_day,
)

logger = logging.getLogger(__name__)


def compute_week_window(now: datetime, time_zone: str) -> WeekWindow:
    """
    Compute the week containing ``now`` in ``time_zone``.

    Monday is day 0. Both bounds are local midnights, so a DST change inside
    the week does not shift them.

    Args:
        now: Current instant (naive values are read as local time in ``time_zone``)
        time_zone: Time zone name used for the day boundaries

    Returns:
        WeekWindow covering [Monday 00:00, next Monday 00:00)
    """
    tz = get_timezone(time_zone)
    today = localize(now, tz).date()
    monday = today - timedelta(days=today.weekday())
    next_monday = monday + timedelta(days=WEEK_SETTINGS.DAYS_IN_WEEK)

    window = WeekWindow(
        start=start_of_day(monday, tz),
        end=start_of_day(next_monday, tz),
        time_zone=time_zone,
    )
    logger.debug("Week window: %s to %s", window.start.isoformat(), window.end.isoformat())
    return window


def bucket_events_by_day(
    events: Iterable[CalendarEvent],
    window: WeekWindow,
) -> Dict[str, List[CalendarEvent]]:
    """
    Group events by the local day of their start.

    All seven days of the window get a key, even with no events. Events with
    no start, or starting outside the window, are dropped. Within a day the
    input order is preserved.
    """
    tz = get_timezone(window.time_zone)
    buckets: Dict[str, List[CalendarEvent]] = {format_day_key(day): [] for day in window.days}

    dropped = 0
    for event in events:
        start = event.start.value
        if start is None:
            dropped += 1
            continue

        day_key = format_day_key(local_day(start, tz))
        if day_key not in buckets:
            dropped += 1
            continue
        buckets[day_key].append(event)

    if dropped:
        logger.debug(f"Dropped {dropped} events without a start inside the week")
    return buckets


def flatten_buckets(buckets: Dict[str, List[CalendarEvent]]) -> List[CalendarEvent]:
    """Events of all buckets in day order."""
    return [event for day_events in buckets.values() for event in day_events]
