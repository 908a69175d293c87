"""
Schedule Window Service

Builds the rolling window of episodes around "now" for one channel by
querying yesterday, today and tomorrow, joining the results and filtering
them by start time.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Literal

from radioinfo.exceptions import ParseError
from radioinfo.services.fetch_types import Episode
from radioinfo.services.schedule_fetcher import ScheduleFetcher
from radioinfo.utils.logging_helpers import log_window_summary
from radioinfo.utils.timezone import (
    DateFormatError,
    calculate_time_window,
    format_query_date,
    reattach_year,
    surrounding_dates,
    to_local,
)


logger = logging.getLogger(__name__)

YearPolicy = Literal["source", "current"]


class ScheduleWindowBuilder:
    """
    Orchestrates per-date fetches and filters them to the open window
    (now - window_hours, now + window_hours).

    year_policy decides how an episode's start is compared to the window:
    "source" uses the full local datetime carried from the payload, while
    "current" re-attaches now's year to the 'MM-dd HH:mm' display string.
    The latter misdates December episodes fetched in early January.
    """

    def __init__(
        self,
        fetcher: ScheduleFetcher,
        *,
        target_tz: str,
        window_hours: int = 12,
        year_policy: YearPolicy = "source",
    ) -> None:
        if year_policy not in ("source", "current"):
            raise ValueError(f"Unknown year policy: {year_policy}")
        self.fetcher = fetcher
        self.target_tz = target_tz
        self.window_hours = window_hours
        self.year_policy = year_policy

    async def build_window(self, channel_id: str, now: datetime) -> list[Episode]:
        """
        Build the episode window for a channel

        Args:
            channel_id: Channel to query
            now: Current instant (timezone-aware)

        Returns:
            Episodes starting strictly inside the window, in fetch order
            (today, tomorrow, yesterday), not re-sorted

        Raises:
            TransportError: If any of the three fetches cannot reach the API
            ParseError: If any of the three documents is malformed
        """
        episodes = await self._collect_dates(channel_id, now)
        window_start, window_end = calculate_time_window(now, self.window_hours)

        filtered = [
            episode for episode in episodes
            if window_start < self._start_instant(episode, now) < window_end
        ]

        log_window_summary(logger, channel_id, window_start, window_end, len(episodes), len(filtered))
        return filtered

    async def _collect_dates(self, channel_id: str, now: datetime) -> list[Episode]:
        """Fetch the three dates concurrently and join them in fetch order"""
        dates = surrounding_dates(now, self.target_tz)
        logger.debug(
            "Fetching channel %s for dates %s",
            channel_id,
            ", ".join(format_query_date(day) for day in dates),
        )

        tasks = [
            asyncio.create_task(self.fetcher.fetch_for_date(channel_id, day))
            for day in dates
        ]
        try:
            results = await asyncio.gather(*tasks)
        except Exception as exc:
            # No partial results: drop whatever is still in flight
            for task in tasks:
                task.cancel()
            logger.error("Schedule fetch for channel %s failed: %s", channel_id, exc)
            raise

        merged: list[Episode] = []
        for day_episodes in results:
            merged.extend(day_episodes)
        return merged

    def _start_instant(self, episode: Episode, now: datetime) -> datetime:
        if self.year_policy == "source":
            return episode.start_at

        local_now = to_local(now, self.target_tz)
        try:
            return reattach_year(episode.start_time, local_now.year, self.target_tz)
        except DateFormatError as e:
            raise ParseError(str(e)) from e
