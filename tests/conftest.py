import asyncio
from datetime import datetime, timedelta
from typing import List

import pytest
import pytz
import requests
from langchain_core.messages import AIMessage

from fin_dashboard.calendars.dto import CalendarEvent, EventTime
from fin_dashboard.calendars.fetcher import CalendarSourceFetcher

NEW_YORK = "America/New_York"


def make_event(event_id: str, start: EventTime, summary: str = None, calendar_id: str = "personal") -> CalendarEvent:
    return CalendarEvent(
        id=event_id,
        summary=summary or event_id,
        start=start,
        calendar_id=calendar_id,
        calendar_name=calendar_id.title(),
        calendar_color="#4285F4",
        time_zone=NEW_YORK,
    )


def ny(*args) -> datetime:
    return pytz.timezone(NEW_YORK).localize(datetime(*args))


class FakeGoogleService:
    """Stands in for the googleapiclient discovery service."""

    def __init__(self, pages=None, error=None):
        self.pages = pages or [{"items": []}]
        self.error = error
        self.calls = []

    def events(self):
        return self

    def list(self, **kwargs):
        self.calls.append(kwargs)
        return self

    def execute(self):
        if self.error is not None:
            raise self.error
        return self.pages[len(self.calls) - 1]


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    def __init__(self, response: FakeResponse):
        self.response = response
        self.requested = []

    def get(self, url, timeout=None, headers=None):
        self.requested.append(url)
        return self.response


class FakeChatModel:
    """Chat model double recording the messages it was invoked with."""

    def __init__(self, content: str = "", error: Exception = None, delay: float = 0):
        self.content = content
        self.error = error
        self.delay = delay
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.content)


class StubFetcher(CalendarSourceFetcher):
    """Returns one event per source, placed relative to the requested range."""

    def __init__(self, kind: str, offset: timedelta = timedelta(days=2, hours=15)):
        self.kind = kind
        self.offset = offset
        self.fetched: List[str] = []
        self.prepared = False

    def prepare(self) -> None:
        self.prepared = True

    async def fetch_events(self, source, time_min, time_max, time_zone):
        self.fetched.append(source.id)
        return [
            CalendarEvent(
                id=f"{source.id}-1",
                summary=f"{source.name} event",
                start=EventTime(date_time=time_min + self.offset),
                end=EventTime(date_time=time_min + self.offset + timedelta(hours=1)),
                calendar_id=source.id,
                calendar_name=source.name,
                calendar_color=source.color,
                time_zone=time_zone,
            )
        ]


class FailingFetcher(CalendarSourceFetcher):
    def __init__(self, kind: str, error: Exception = None, delay: float = 0):
        self.kind = kind
        self.error = error or ConnectionError("upstream unreachable")
        self.delay = delay

    async def fetch_events(self, source, time_min, time_max, time_zone):
        if self.delay:
            await asyncio.sleep(self.delay)
        raise self.error


@pytest.fixture
def week_start():
    return ny(2025, 1, 6)


@pytest.fixture
def week_end():
    return ny(2025, 1, 13)
