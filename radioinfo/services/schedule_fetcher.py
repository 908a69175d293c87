"""
Schedule Fetcher

Retrieves one calendar date of scheduled episodes for a channel.
"""
from datetime import date
import logging

from radioinfo.services.api_client import SverigesRadioClient
from radioinfo.services.fetch_types import Episode
from radioinfo.services.xml_parser_service import parse_scheduled_episodes
from radioinfo.utils.timezone import format_query_date


logger = logging.getLogger(__name__)


class ScheduleFetcher:
    """Maps a single date's scheduled episodes into local-time Episode values."""

    def __init__(self, client: SverigesRadioClient, target_tz: str) -> None:
        self.client = client
        self.target_tz = target_tz

    async def fetch_for_date(self, channel_id: str, day: date) -> list[Episode]:
        """
        Fetch scheduled episodes for one channel and one date

        Args:
            channel_id: Channel to query
            day: Calendar date to query

        Returns:
            Episodes in upstream order (empty list if nothing is scheduled)

        Raises:
            TransportError: If the API cannot be reached
            ParseError: If the schedule document is malformed
        """
        query_date = format_query_date(day)
        logger.debug("Fetching schedule for channel %s on %s", channel_id, query_date)

        content = await self.client.get_xml(
            "scheduledepisodes",
            {"channelid": channel_id, "date": query_date, "pagination": "false"},
        )
        episodes = parse_scheduled_episodes(content, self.target_tz)

        logger.info(
            "  [Channel %s] %s: %s episodes",
            channel_id,
            query_date,
            len(episodes),
        )
        return episodes
