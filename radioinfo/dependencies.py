"""
Service wiring

Builds the schedule pipeline from settings and exposes it as a lazily created
singleton, so routers and the lifespan share one set of services and tests
can swap it out through FastAPI dependency overrides.
"""
import asyncio
import logging
from datetime import datetime
from functools import partial
from typing import Callable

from radioinfo.config import CustomSettings, settings
from radioinfo.services.api_client import SverigesRadioClient
from radioinfo.services.channel_directory import ChannelDirectory
from radioinfo.services.fetch_types import Channel
from radioinfo.services.refresh_coordinator import ScheduleRefresher
from radioinfo.services.schedule_board import ScheduleBoard
from radioinfo.services.schedule_fetcher import ScheduleFetcher
from radioinfo.services.schedule_window_service import ScheduleWindowBuilder
from radioinfo.services.scheduler_service import RefreshScheduler
from radioinfo.utils.timezone import now_in


logger = logging.getLogger(__name__)


class ScheduleServices:
    """
    Holds every long-lived collaborator of the schedule pipeline.

    The channel directory result is cached here, not inside ChannelDirectory;
    load_channels() decides when to re-fetch it.
    """

    def __init__(
        self,
        config: CustomSettings,
        client: SverigesRadioClient | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.config = config
        self.client = client or SverigesRadioClient(
            config.api_base_url,
            timeout=config.request_timeout_sec,
            max_retries=config.http_max_retries,
            backoff_factor=config.http_backoff_factor,
        )
        self.clock = clock or partial(now_in, config.timezone)
        self.directory = ChannelDirectory(self.client)
        self.fetcher = ScheduleFetcher(self.client, config.timezone)
        self.builder = ScheduleWindowBuilder(
            self.fetcher,
            target_tz=config.timezone,
            window_hours=config.window_hours,
            year_policy=config.year_policy,
        )
        self.board = ScheduleBoard()
        self.refresher = ScheduleRefresher(self.builder, self.board, self.clock)
        self.scheduler = RefreshScheduler(
            self.refresher,
            config.refresh_cron,
            config.timezone,
            config.refresh_misfire_grace_sec,
        )
        self._channels: list[Channel] | None = None
        self._channels_lock = asyncio.Lock()

    async def load_channels(self, refresh: bool = False) -> list[Channel]:
        """
        Return the cached channel directory, fetching it on first use or when asked.

        Raises:
            TransportError: If the directory cannot be fetched
            ParseError: If the directory is malformed
        """
        async with self._channels_lock:
            if self._channels is None or refresh:
                self._channels = await self.directory.fetch_all()
            return list(self._channels)

    async def aclose(self) -> None:
        self.scheduler.shutdown()
        await self.client.aclose()


# Global singleton instance
_services: ScheduleServices | None = None


def get_services() -> ScheduleServices:
    """
    Get or create the global schedule services singleton.

    Returns:
        The global ScheduleServices instance
    """
    global _services
    if _services is None:
        _services = ScheduleServices(settings)
    return _services


def reset_services() -> None:
    """
    Reset the schedule services (mainly for testing).

    WARNING: Only use this in test environments!
    """
    global _services
    _services = None
