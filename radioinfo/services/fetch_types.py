"""
Shared dataclasses used across the schedule pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from radioinfo.utils.timezone import format_display_time


@dataclass(frozen=True, slots=True)
class Channel:
    """A broadcast station as listed by the channel directory."""
    id: str
    name: str
    image_url: str | None = None
    tagline: str | None = None
    channel_type: str | None = None


@dataclass(frozen=True, slots=True)
class Episode:
    """A scheduled broadcast, with start/end already converted to local time.

    The full local datetimes are kept so windowing never has to guess a year;
    start_time/end_time are the truncated display strings.
    """
    title: str
    description: str
    start_at: datetime
    end_at: datetime
    image_url: str | None = None

    @property
    def start_time(self) -> str:
        return format_display_time(self.start_at)

    @property
    def end_time(self) -> str:
        return format_display_time(self.end_at)

    @property
    def has_image(self) -> bool:
        return self.image_url is not None


__all__ = ["Channel", "Episode"]
