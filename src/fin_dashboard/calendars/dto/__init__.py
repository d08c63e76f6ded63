"""
Calendar Data Transfer Objects (DTOs)

This module contains all data models used by the calendar components:
- Event times and normalized calendar events
- Calendar source configuration (one variant per source kind)
- Week window and per-request aggregation results
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from fin_dashboard.calendars.constants import DEFAULT_CALENDAR_COLOR, WEEK_SETTINGS


class EventTime(BaseModel):
    """Start or end of an event: a datetime, or a date for all-day events."""
    model_config = ConfigDict(populate_by_name=True)

    date_time: Optional[datetime] = Field(default=None, alias="dateTime")
    day: Optional[date] = Field(default=None, alias="date")

    @property
    def value(self) -> Optional[Union[datetime, date]]:
        if self.date_time is not None:
            return self.date_time
        return self.day

    @property
    def is_all_day(self) -> bool:
        return self.date_time is None and self.day is not None


class CalendarEvent(BaseModel):
    """Calendar event normalized from any source, tagged with its source metadata."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    summary: str
    start: EventTime
    end: Optional[EventTime] = None
    calendar_id: str = Field(alias="calendarId")
    calendar_name: str = Field(alias="calendarName")
    calendar_color: str = Field(alias="calendarColor")
    time_zone: str = Field(alias="timeZone")


class _CalendarSourceBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    color: str = DEFAULT_CALENDAR_COLOR
    time_zone: Optional[str] = Field(default=None, alias="timeZone")
    enabled: bool = True


class RemoteApiSource(_CalendarSourceBase):
    """Calendar read through the Google Calendar API."""
    kind: Literal["remote-api"] = "remote-api"
    calendar_id: Optional[str] = Field(default=None, alias="calendarId")
    embed_url: Optional[str] = Field(default=None, alias="embedUrl")


class FeedUrlSource(_CalendarSourceBase):
    """Calendar published as an iCal document at a URL."""
    kind: Literal["feed-url"] = "feed-url"
    url: str


CalendarSource = Annotated[Union[RemoteApiSource, FeedUrlSource], Field(discriminator="kind")]


class CalendarConfig(BaseModel):
    """Declarative list of calendar sources plus the default display time zone."""
    model_config = ConfigDict(populate_by_name=True)

    time_zone: str = Field(alias="timeZone")
    calendars: List[CalendarSource] = Field(default_factory=list)

    def enabled_sources(self) -> List[Union[RemoteApiSource, FeedUrlSource]]:
        return [source for source in self.calendars if source.enabled]


@dataclass(frozen=True)
class WeekWindow:
    """Half-open [start, end) range from Monday 00:00 to the following Monday 00:00, local time."""
    start: datetime
    end: datetime
    time_zone: str

    @property
    def days(self) -> List[date]:
        first = self.start.date()
        return [first + timedelta(days=offset) for offset in range(WEEK_SETTINGS.DAYS_IN_WEEK)]

    @property
    def last_instant(self) -> datetime:
        """Sunday 23:59:59.999 local time."""
        return self.end - timedelta(milliseconds=1)

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


@dataclass
class SourceFailure:
    """Diagnostic record for a calendar source that could not be read."""
    source_id: str
    error: str


@dataclass
class AdapterResult:
    """Events gathered from all sources, plus the sources that failed."""
    events: List[CalendarEvent] = field(default_factory=list)
    failures: List[SourceFailure] = field(default_factory=list)


@dataclass
class WeekEvents:
    """Events of the current week bucketed by day key."""
    window: WeekWindow
    buckets: Dict[str, List[CalendarEvent]]
    failures: List[SourceFailure] = field(default_factory=list)
