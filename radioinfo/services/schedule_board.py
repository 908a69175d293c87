"""
Schedule Board

In-memory presentation sink holding the latest delivered schedule snapshot.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol, Sequence

from radioinfo.services.fetch_types import Episode

FALLBACK_MESSAGE = "Episodes could not be found."


class ScheduleSink(Protocol):
    """Receives either a window of episodes or an error for a channel."""

    def publish(self, channel_id: str, episodes: Sequence[Episode]) -> None: ...

    def publish_error(self, channel_id: str, message: str) -> None: ...


@dataclass(frozen=True, slots=True)
class BoardSnapshot:
    channel_id: str | None = None
    episodes: tuple[Episode, ...] = ()
    error: str | None = None
    updated_at: datetime | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


@dataclass(slots=True)
class ScheduleBoard:
    """Keeps one snapshot; every publish replaces it entirely."""
    snapshot: BoardSnapshot = field(default_factory=BoardSnapshot)

    def publish(self, channel_id: str, episodes: Sequence[Episode]) -> None:
        self.snapshot = BoardSnapshot(
            channel_id=channel_id,
            episodes=tuple(episodes),
            updated_at=datetime.now(timezone.utc),
        )

    def publish_error(self, channel_id: str, message: str = FALLBACK_MESSAGE) -> None:
        self.snapshot = BoardSnapshot(
            channel_id=channel_id,
            error=message,
            updated_at=datetime.now(timezone.utc),
        )
