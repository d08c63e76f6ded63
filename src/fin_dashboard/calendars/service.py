import logging
from datetime import datetime
from typing import Optional

import pytz

from fin_dashboard.calendars.adapter import CalendarSourceAdapter
from fin_dashboard.calendars.dto import CalendarConfig, WeekEvents
from fin_dashboard.calendars.week import bucket_events_by_day, compute_week_window

logger = logging.getLogger(__name__)


class CalendarService:
    """Fetches all configured sources for the current week and buckets them by day."""

    def __init__(self, adapter: CalendarSourceAdapter, config: CalendarConfig):
        self.adapter = adapter
        self.config = config

    @property
    def time_zone(self) -> str:
        return self.config.time_zone

    async def get_week(self, now: Optional[datetime] = None) -> WeekEvents:
        """
        Aggregate this week's events.

        The window and all sources are recomputed on every call.
        """
        now = now or datetime.now(pytz.UTC)
        window = compute_week_window(now, self.time_zone)

        result = await self.adapter.fetch_events(self.config.calendars, window.start, window.end)
        buckets = bucket_events_by_day(result.events, window)
        logger.debug("Bucketed %d events into %d days", len(result.events), len(buckets))
        return WeekEvents(window=window, buckets=buckets, failures=result.failures)
