from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from radioinfo.services.fetch_types import Channel, Episode


class SelectionRequest(BaseModel):
    """Channel selection request"""
    channel_id: str = Field(..., min_length=1, description="Channel ID to display")

    @field_validator('channel_id')
    @classmethod
    def validate_channel_id(cls, v: str) -> str:
        """Channel IDs are numeric strings upstream; reject blanks and whitespace"""
        v = v.strip()
        if not v:
            raise ValueError("channel_id must not be blank")
        return v


class ChannelResponse(BaseModel):
    """Channel data"""
    id: str = Field(..., description="Channel ID")
    name: str = Field(..., description="Display name of the channel")
    image_url: str | None = Field(None, description="URL to channel image")
    tagline: str | None = None
    channel_type: str | None = None

    @classmethod
    def from_channel(cls, channel: Channel) -> "ChannelResponse":
        return cls(
            id=channel.id,
            name=channel.name,
            image_url=channel.image_url,
            tagline=channel.tagline,
            channel_type=channel.channel_type,
        )


class ChannelListResponse(BaseModel):
    """Channel directory response"""
    total_channels: int
    channels: list[ChannelResponse]


class EpisodeResponse(BaseModel):
    """Single episode, times in local 'MM-dd HH:mm' format"""
    title: str
    start_time: str
    end_time: str
    description: str | None = Field(None, description="Omitted in light mode")
    image_url: str | None = Field(None, description="Omitted in light mode or when the episode has no image")

    @classmethod
    def from_episode(cls, episode: Episode, detailed: bool = True) -> "EpisodeResponse":
        if not detailed:
            return cls(title=episode.title, start_time=episode.start_time, end_time=episode.end_time)
        return cls(
            title=episode.title,
            start_time=episode.start_time,
            end_time=episode.end_time,
            description=episode.description,
            image_url=episode.image_url,
        )


class ScheduleResponse(BaseModel):
    """Schedule window response"""
    channel_id: str | None
    timezone: str = Field(..., description="Timezone used for all episode times")
    detailed: bool
    total_episodes: int
    episodes: list[EpisodeResponse]
    error: str | None = Field(None, description="Fallback message when the schedule could not be fetched")
    updated_at: str | None = None


class ErrorDetail(BaseModel):
    """Standard error detail"""
    code: str = Field(..., description="Error code (e.g., 'TRANSPORT_ERROR', 'PARSE_ERROR')")
    message: str = Field(..., description="Human-readable error message")
    context: dict | None = Field(None, description="Additional context about the error")


class StandardErrorResponse(BaseModel):
    """Standardized error response for all endpoints"""
    status: str = Field("error", description="Status indicator")
    timestamp: str = Field(..., description="ISO8601 timestamp of error")
    error: ErrorDetail = Field(..., description="Error details")


def format_updated_at(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
