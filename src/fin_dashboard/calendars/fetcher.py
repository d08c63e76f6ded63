"""
Shared interface of the per-kind calendar fetchers.
"""

from datetime import datetime
from typing import List, Optional

import pytz

from fin_dashboard.calendars.dto import CalendarEvent, EventTime
from fin_dashboard.calendars.utils.datetime_utils import to_instant


class CalendarSourceFetcher:
    """
    Fetch-and-normalize interface implemented once per source kind.

    ``prepare`` runs before any source is fetched and may raise; those errors
    abort the whole request. ``fetch_events`` errors only affect one source.
    """

    kind: str = ""

    def prepare(self) -> None:
        """Construct clients needed by this fetcher."""

    async def fetch_events(
        self,
        source,
        time_min: datetime,
        time_max: datetime,
        time_zone: str,
    ) -> List[CalendarEvent]:
        raise NotImplementedError


def normalize_end(start: EventTime, end: Optional[EventTime], tz: pytz.BaseTzInfo) -> Optional[EventTime]:
    """Drop an end that is missing a value or lies before the start."""
    if end is None or end.value is None:
        return None
    if start.value is None:
        return end
    if to_instant(end.value, tz) < to_instant(start.value, tz):
        return None
    return end
