"""
iCal Feed Client

Fetches iCal documents over HTTP and normalizes their VEVENTs into
CalendarEvent objects for the requested range.
"""

import asyncio
import logging
from datetime import date, datetime
from typing import List, Optional, Set, Union

import recurring_ical_events
import requests
from icalendar import Calendar

from fin_dashboard.calendars.constants import DEFAULT_EVENT_TITLE, FEED_SETTINGS, FeedSettings
from fin_dashboard.calendars.dto import CalendarEvent, EventTime, FeedUrlSource
from fin_dashboard.calendars.fetcher import CalendarSourceFetcher, normalize_end
from fin_dashboard.calendars.utils.datetime_utils import get_timezone, localize, to_instant

logger = logging.getLogger(__name__)


def normalize_feed_url(url: str) -> str:
    """Rewrite webcal:// links to https://."""
    if url.lower().startswith(FEED_SETTINGS.WEBCAL_SCHEME):
        return "https://" + url[len(FEED_SETTINGS.WEBCAL_SCHEME):]
    return url


def _to_event_time(value: Union[datetime, date], tz) -> EventTime:
    if isinstance(value, datetime):
        return EventTime(date_time=localize(value, tz))
    return EventTime(day=value)


def parse_feed_events(
    payload: Union[str, bytes],
    source: FeedUrlSource,
    time_min: datetime,
    time_max: datetime,
    time_zone: str,
) -> List[CalendarEvent]:
    """
    Parse an iCal document into CalendarEvents between ``time_min`` and ``time_max``.

    Recurring events are expanded into occurrences. An event is discarded when
    its end is before ``time_min`` or its start is after ``time_max``; events
    without DTSTART are skipped.
    """
    tz = get_timezone(time_zone)
    calendar = Calendar.from_ical(payload)

    events = []
    seen_ids: Set[str] = set()
    for component in recurring_ical_events.of(calendar).between(time_min, time_max):
        dtstart = component.get("DTSTART")
        if dtstart is None:
            continue

        start_value = dtstart.dt
        end_value = _resolve_end(component, start_value)

        start_instant = to_instant(start_value, tz)
        end_instant = to_instant(end_value, tz) if end_value is not None else start_instant
        if end_instant < time_min or start_instant > time_max:
            continue

        start = _to_event_time(start_value, tz)
        end = _to_event_time(end_value, tz) if end_value is not None else None

        event_id = _event_id(component, source, start_instant, seen_ids)
        seen_ids.add(event_id)

        events.append(CalendarEvent(
            id=event_id,
            summary=str(component.get("SUMMARY") or DEFAULT_EVENT_TITLE),
            start=start,
            end=normalize_end(start, end, tz),
            calendar_id=source.id,
            calendar_name=source.name,
            calendar_color=source.color,
            time_zone=time_zone,
        ))

    return events


def _resolve_end(component, start_value: Union[datetime, date]) -> Optional[Union[datetime, date]]:
    dtend = component.get("DTEND")
    if dtend is not None:
        return dtend.dt
    duration = component.get("DURATION")
    if duration is not None:
        return start_value + duration.dt
    return None


def _event_id(component, source: FeedUrlSource, start_instant: datetime, seen_ids: Set[str]) -> str:
    uid = component.get("UID")
    if not uid:
        return f"{source.id}-{start_instant.isoformat()}"
    event_id = str(uid)
    # occurrences of one recurring event share the UID
    if event_id in seen_ids:
        event_id = f"{event_id}_{start_instant.isoformat()}"
    return event_id


class IcalFeedClient(CalendarSourceFetcher):
    """Reads events of feed-url sources."""

    kind = "feed-url"

    def __init__(self, settings: FeedSettings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    def _download(self, url: str) -> bytes:
        response = self.session.get(
            url,
            timeout=self.settings.timeout,
            headers={"User-Agent": FEED_SETTINGS.USER_AGENT, "Accept": FEED_SETTINGS.ACCEPT},
        )
        response.raise_for_status()
        return response.content

    async def fetch_events(
        self,
        source: FeedUrlSource,
        time_min: datetime,
        time_max: datetime,
        time_zone: str,
    ) -> List[CalendarEvent]:
        url = normalize_feed_url(source.url)
        payload = await asyncio.to_thread(self._download, url)
        events = parse_feed_events(payload, source, time_min, time_max, time_zone)
        logger.info(f"Fetched {len(events)} events from feed '{source.id}'")
        return events
