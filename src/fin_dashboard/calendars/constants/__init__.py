"""
Calendar Source Constants
"""

from dataclasses import dataclass


class GOOGLE_CALENDAR_SETTINGS:
    """Google Calendar settings"""
    SERVICE_NAME = "calendar"
    API_VERSION = "v3"
    MAX_RESULTS = 250
    ORDER_BY = "startTime"
    # Query parameters that carry the calendar id in embed/subscription URLs
    EMBED_ID_PARAMS = ("src", "cid")


class FEED_SETTINGS:
    """iCal feed settings"""
    WEBCAL_SCHEME = "webcal://"
    USER_AGENT = "fin-dashboard/1.0"
    ACCEPT = "text/calendar, text/plain;q=0.9, */*;q=0.5"


class WEEK_SETTINGS:
    """Week window and display formats"""
    DAYS_IN_WEEK = 7
    DAY_KEY_FORMAT = "%m/%d/%Y"
    DAY_HEADER_FORMAT = "%A, %B {day}"
    EVENT_TIME_FORMAT = "%I:%M %p"


DEFAULT_EVENT_TITLE = "Untitled Event"
DEFAULT_CALENDAR_COLOR = "#4285F4"


@dataclass(frozen=True)
class GoogleCalendarSettings:
    """Explicit configuration for the Google Calendar client"""
    api_key: str
    max_results: int = GOOGLE_CALENDAR_SETTINGS.MAX_RESULTS


@dataclass(frozen=True)
class FeedSettings:
    """Explicit configuration for the iCal feed client"""
    timeout: float = 15.0
