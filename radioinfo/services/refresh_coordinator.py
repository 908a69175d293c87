"""
Refresh Coordination

Tracks the selected channel and delivers freshly built windows to the
presentation sink. Each handoff happens under an asyncio.Lock, and results
from a refresh that was superseded by a newer selection are dropped.
"""
import asyncio
import logging
from datetime import datetime
from typing import Callable, Literal, TypedDict

from radioinfo.exceptions import ScheduleSourceError
from radioinfo.services.schedule_board import FALLBACK_MESSAGE, ScheduleSink
from radioinfo.services.schedule_window_service import ScheduleWindowBuilder
from radioinfo.utils.logging_helpers import log_refresh_start


logger = logging.getLogger(__name__)


class RefreshResult(TypedDict, total=False):
    status: Literal["delivered", "failed", "stale", "skipped"]
    channel_id: str | None
    generation: int
    episodes: int
    error: str
    message: str


class ScheduleRefresher:
    """
    Coordinates schedule refreshes for the selected channel.

    The selection is read once when a refresh starts. A generation counter is
    bumped on every selection change; a refresh that finishes after a newer
    selection has been made is discarded instead of overwriting the sink.
    """

    def __init__(
        self,
        builder: ScheduleWindowBuilder,
        sink: ScheduleSink,
        clock: Callable[[], datetime],
    ) -> None:
        """Initialize the refresher with an empty selection."""
        self.builder = builder
        self.sink = sink
        self.clock = clock
        self._handoff_lock = asyncio.Lock()
        self._channel_id: str | None = None
        self._generation = 0

    @property
    def selected_channel_id(self) -> str | None:
        return self._channel_id

    @property
    def generation(self) -> int:
        return self._generation

    async def select(self, channel_id: str) -> RefreshResult:
        """
        Select a channel and refresh it immediately.

        Args:
            channel_id: Channel to display from now on

        Returns:
            Outcome of the refresh triggered by the selection
        """
        self._channel_id = channel_id
        self._generation += 1
        logger.info("Channel %s selected (generation %s)", channel_id, self._generation)
        return await self.refresh()

    async def refresh(self) -> RefreshResult:
        """
        Build the window for the currently selected channel and deliver it.

        Returns:
            Outcome dictionary with a status of delivered, failed, stale or skipped
        """
        channel_id = self._channel_id
        generation = self._generation
        if channel_id is None:
            logger.debug("No channel selected, skipping refresh")
            return {"status": "skipped", "channel_id": None, "message": "No channel selected"}

        log_refresh_start(logger, channel_id, generation)

        error: ScheduleSourceError | None = None
        episodes = []
        try:
            episodes = await self.builder.build_window(channel_id, self.clock())
        except ScheduleSourceError as exc:
            logger.error("Schedule refresh for channel %s failed: %s", channel_id, exc)
            error = exc

        async with self._handoff_lock:
            if generation != self._generation:
                logger.info(
                    "Dropping stale refresh for channel %s (generation %s, current %s)",
                    channel_id,
                    generation,
                    self._generation,
                )
                return {"status": "stale", "channel_id": channel_id, "generation": generation}

            if error is not None:
                self.sink.publish_error(channel_id, FALLBACK_MESSAGE)
                return {
                    "status": "failed",
                    "channel_id": channel_id,
                    "generation": generation,
                    "error": str(error),
                }

            self.sink.publish(channel_id, episodes)

        logger.info("Delivered %s episodes for channel %s", len(episodes), channel_id)
        return {
            "status": "delivered",
            "channel_id": channel_id,
            "generation": generation,
            "episodes": len(episodes),
        }
