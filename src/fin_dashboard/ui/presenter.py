"""
Dashboard Presenter

The calendar panel is driven by explicit state transitions: actions are fed
through ``update`` and the resulting state is turned into a view model that
the dashboard template renders. Every state renders something visible
(loading text, the error, a "no events" notice, or the day sections).
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Union

from fin_dashboard.calendars.dto import CalendarEvent
from fin_dashboard.calendars.utils.datetime_utils import (
    format_day_header,
    format_event_time,
    get_timezone,
    parse_day_key,
)
from fin_dashboard.ui.placeholders import PlaceholderFinances

LOADING_MESSAGE = "Loading events..."
EMPTY_WEEK_MESSAGE = "No events this week"
EMPTY_DAY_MESSAGE = "No events"


class PanelStatus(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    LOADED = "loaded"


@dataclass(frozen=True)
class CalendarPanelState:
    status: PanelStatus = PanelStatus.LOADING
    buckets: Dict[str, List[CalendarEvent]] = field(default_factory=dict)
    error: Optional[str] = None


@dataclass(frozen=True)
class EventsRequested:
    pass


@dataclass(frozen=True)
class EventsReceived:
    buckets: Dict[str, List[CalendarEvent]]


@dataclass(frozen=True)
class EventsFailed:
    message: str


PanelAction = Union[EventsRequested, EventsReceived, EventsFailed]


def update(state: CalendarPanelState, action: PanelAction) -> CalendarPanelState:
    """Return the panel state that follows ``state`` after ``action``."""
    if isinstance(action, EventsRequested):
        return CalendarPanelState(status=PanelStatus.LOADING)
    if isinstance(action, EventsReceived):
        has_events = any(action.buckets.values())
        return CalendarPanelState(
            status=PanelStatus.LOADED if has_events else PanelStatus.EMPTY,
            buckets=dict(action.buckets),
        )
    if isinstance(action, EventsFailed):
        return CalendarPanelState(status=PanelStatus.ERROR, error=action.message)
    raise TypeError(f"Unknown calendar panel action: {action!r}")


@dataclass
class EventItem:
    id: str
    title: str
    time: str
    calendar_name: str
    color: str


@dataclass
class DaySection:
    key: str
    header: str
    items: List[EventItem]

    @property
    def empty_message(self) -> Optional[str]:
        return None if self.items else EMPTY_DAY_MESSAGE


@dataclass
class CalendarPanelView:
    status: PanelStatus
    message: Optional[str]
    days: List[DaySection]


@dataclass
class DashboardView:
    headline: str
    calendar: CalendarPanelView
    finances: PlaceholderFinances


def build_calendar_panel(state: CalendarPanelState, time_zone: str) -> CalendarPanelView:
    if state.status == PanelStatus.LOADING:
        return CalendarPanelView(status=state.status, message=LOADING_MESSAGE, days=[])
    if state.status == PanelStatus.ERROR:
        return CalendarPanelView(status=state.status, message=state.error, days=[])
    if state.status == PanelStatus.EMPTY:
        return CalendarPanelView(status=state.status, message=EMPTY_WEEK_MESSAGE, days=[])

    tz = get_timezone(time_zone)
    days = []
    for key in sorted(state.buckets, key=parse_day_key):
        items = [
            EventItem(
                id=event.id,
                title=event.summary,
                time=format_event_time(event.start, tz),
                calendar_name=event.calendar_name,
                color=event.calendar_color,
            )
            for event in state.buckets[key]
        ]
        days.append(DaySection(key=key, header=format_day_header(parse_day_key(key)), items=items))
    return CalendarPanelView(status=state.status, message=None, days=days)


def build_dashboard_view(
    state: CalendarPanelState,
    finances: PlaceholderFinances,
    time_zone: str,
    today: date,
) -> DashboardView:
    return DashboardView(
        headline=f"WEEKLY FINANCIAL CHECK-IN: {today.month}/{today.day}/{today.year}",
        calendar=build_calendar_panel(state, time_zone),
        finances=finances,
    )
