"""
Google Calendar Client
"""

import asyncio
import base64
import binascii
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import parse_qs, urlparse

from googleapiclient.discovery import build

from fin_dashboard.calendars.constants import (
    DEFAULT_EVENT_TITLE,
    GOOGLE_CALENDAR_SETTINGS,
    GoogleCalendarSettings,
)
from fin_dashboard.calendars.dto import CalendarEvent, RemoteApiSource
from fin_dashboard.calendars.fetcher import CalendarSourceFetcher, normalize_end
from fin_dashboard.calendars.utils.datetime_utils import (
    get_timezone,
    parse_google_calendar_datetime,
    to_utc_iso,
)

# Set up logging
logger = logging.getLogger(__name__)


def _decode_cid(value: str) -> str:
    """Subscription links carry the calendar id base64-encoded; plain ids pass through."""
    if "@" in value:
        return value
    padded = value + "=" * (-len(value) % 4)
    try:
        decoded = base64.urlsafe_b64decode(padded).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return value
    return decoded if "@" in decoded else value


def resolve_calendar_id(source: RemoteApiSource) -> str:
    """
    Resolve the calendar id of a remote-api source.

    Uses ``calendarId`` when set, otherwise the ``src`` or ``cid`` query
    parameter of the embed/subscription URL.

    Raises:
        ValueError: if neither yields an id
    """
    if source.calendar_id:
        return source.calendar_id

    if source.embed_url:
        query = parse_qs(urlparse(source.embed_url).query)
        for param in GOOGLE_CALENDAR_SETTINGS.EMBED_ID_PARAMS:
            values = query.get(param)
            if values and values[0]:
                return _decode_cid(values[0]) if param == "cid" else values[0]

    raise ValueError(f"Calendar source '{source.id}' has no calendarId and no usable embedUrl")


class GoogleCalendarClient(CalendarSourceFetcher):
    """
    Reads events of remote-api sources through the Google Calendar API.

    Authenticates with an API key, so only public calendars are reachable.
    Each listing builds its own discovery service; service objects must not
    be shared across worker threads.
    """

    kind = "remote-api"

    def __init__(self, settings: GoogleCalendarSettings, service_factory: Optional[Callable[[], Any]] = None):
        """
        Initialize the Google Calendar client.

        Args:
            settings: API key and listing limits
            service_factory: Builds one discovery service per listing; built from the API key otherwise
        """
        self.settings = settings
        self.service_factory = service_factory or self._build_service

    def prepare(self) -> None:
        """
        Check that the client can authenticate.

        Raises:
            ValueError: if no API key is configured
        """
        if not self.settings.api_key:
            raise ValueError("GOOGLE_API_KEY is not configured")

    def _build_service(self) -> Any:
        return build(
            GOOGLE_CALENDAR_SETTINGS.SERVICE_NAME,
            GOOGLE_CALENDAR_SETTINGS.API_VERSION,
            developerKey=self.settings.api_key,
            cache_discovery=False,
        )

    async def fetch_events(
        self,
        source: RemoteApiSource,
        time_min: datetime,
        time_max: datetime,
        time_zone: str,
    ) -> List[CalendarEvent]:
        calendar_id = resolve_calendar_id(source)
        items = await asyncio.to_thread(self._list_events, calendar_id, time_min, time_max, time_zone)

        events = []
        for item in items:
            if item.get("status") == "cancelled":
                continue
            events.append(self._convert_to_calendar_event(item, source, time_zone))

        logger.info(f"Fetched {len(events)} events from Google calendar '{source.id}'")
        return events

    def _list_events(
        self,
        calendar_id: str,
        time_min: datetime,
        time_max: datetime,
        time_zone: str,
    ) -> List[Dict[str, Any]]:
        """
        List single events (recurrences expanded) between the two instants.

        Blocking; runs in a worker thread.
        """
        self.prepare()
        service = self.service_factory()
        items: List[Dict[str, Any]] = []
        page_token = None
        while True:
            events_result = service.events().list(
                calendarId=calendar_id,
                timeMin=to_utc_iso(time_min),
                timeMax=to_utc_iso(time_max),
                singleEvents=True,
                orderBy=GOOGLE_CALENDAR_SETTINGS.ORDER_BY,
                timeZone=time_zone,
                maxResults=self.settings.max_results,
                pageToken=page_token,
            ).execute()

            items.extend(events_result.get("items", []))
            page_token = events_result.get("nextPageToken")
            if not page_token:
                return items

    def _convert_to_calendar_event(
        self,
        google_event: Dict[str, Any],
        source: RemoteApiSource,
        time_zone: str,
    ) -> CalendarEvent:
        """
        Convert a Google Calendar event to a CalendarEvent DTO.

        Args:
            google_event: Google Calendar event data
            source: Source the event was read from
            time_zone: Resolved time zone of the source

        Returns:
            CalendarEvent carrying the source's id, name and color
        """
        start = parse_google_calendar_datetime(google_event.get("start"))
        end = parse_google_calendar_datetime(google_event.get("end"))

        return CalendarEvent(
            id=google_event.get("id", ""),
            summary=google_event.get("summary") or DEFAULT_EVENT_TITLE,
            start=start,
            end=normalize_end(start, end, get_timezone(time_zone)),
            calendar_id=source.id,
            calendar_name=source.name,
            calendar_color=source.color,
            time_zone=time_zone,
        )
