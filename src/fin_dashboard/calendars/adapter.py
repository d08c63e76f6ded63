"""
Calendar Source Adapter

Fetches every enabled source concurrently through the fetcher registered
for its kind and concatenates the normalized events. A source that fails
contributes nothing; its error is logged and reported in the result.
"""

import asyncio
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from fin_dashboard.calendars.dto import AdapterResult, CalendarEvent, SourceFailure
from fin_dashboard.calendars.fetcher import CalendarSourceFetcher

logger = logging.getLogger(__name__)


class CalendarSourceAdapter:
    """Dispatches calendar sources to their per-kind fetchers."""

    def __init__(
        self,
        fetchers: Iterable[CalendarSourceFetcher],
        default_time_zone: str,
        timeout: float = 15.0,
    ):
        self.fetchers: Dict[str, CalendarSourceFetcher] = {fetcher.kind: fetcher for fetcher in fetchers}
        self.default_time_zone = default_time_zone
        self.timeout = timeout

    async def fetch_events(self, sources, time_min: datetime, time_max: datetime) -> AdapterResult:
        """
        Fetch events of all enabled sources between ``time_min`` and ``time_max``.

        Raises only when a fetcher cannot be prepared (e.g. a missing API key);
        per-source errors are recorded in ``AdapterResult.failures``.
        """
        enabled = [source for source in sources if source.enabled]

        for kind in {source.kind for source in enabled}:
            fetcher = self.fetchers.get(kind)
            if fetcher is not None:
                fetcher.prepare()

        outcomes = await asyncio.gather(
            *(self._fetch_source(source, time_min, time_max) for source in enabled)
        )

        result = AdapterResult()
        for events, failure in outcomes:
            result.events.extend(events)
            if failure is not None:
                result.failures.append(failure)

        logger.info(
            "Fetched %d events from %d sources (%d failed)",
            len(result.events),
            len(enabled),
            len(result.failures),
        )
        return result

    async def _fetch_source(
        self,
        source,
        time_min: datetime,
        time_max: datetime,
    ) -> Tuple[List[CalendarEvent], Optional[SourceFailure]]:
        time_zone = source.time_zone or self.default_time_zone
        fetcher = self.fetchers.get(source.kind)
        if fetcher is None:
            message = f"No fetcher registered for source kind '{source.kind}'"
            logger.error(f"Calendar source '{source.id}': {message}")
            return [], SourceFailure(source_id=source.id, error=message)

        try:
            events = await asyncio.wait_for(
                fetcher.fetch_events(source, time_min, time_max, time_zone),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            message = f"Timed out after {self.timeout:.0f}s"
            logger.warning(f"Calendar source '{source.id}': {message}")
            return [], SourceFailure(source_id=source.id, error=message)
        except Exception as e:
            logger.error(f"Error fetching calendar source '{source.id}': {str(e)}")
            return [], SourceFailure(source_id=source.id, error=str(e))

        return events, None
