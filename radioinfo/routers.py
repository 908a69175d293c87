from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, Query
import logging

from radioinfo.dependencies import ScheduleServices, get_services
from radioinfo.schemas import (
    ChannelListResponse,
    ChannelResponse,
    EpisodeResponse,
    ScheduleResponse,
    SelectionRequest,
    format_updated_at,
)


logger = logging.getLogger(__name__)

main_router = APIRouter()

Services = Annotated[ScheduleServices, Depends(get_services)]


@main_router.get("/")
async def root(services: Services) -> dict:
    """Root endpoint with service information"""
    next_run = services.scheduler.get_next_run_time()

    return {
        "service": "Radio Schedule Service",
        "version": "0.1.0",
        "selected_channel": services.refresher.selected_channel_id,
        "next_scheduled_refresh": next_run.isoformat() if next_run else None,
        "endpoints": {
            "channels": "/channels - List all channels",
            "schedule": "/channels/{channel_id}/schedule - Episodes within the window around now",
            "selection": "/selection - Select a channel (POST) or read its latest schedule (GET)",
            "health": "/health - Health check"
        }
    }


@main_router.get("/health")
async def health_check(services: Services) -> dict:
    """Health check endpoint"""
    next_run = services.scheduler.get_next_run_time()
    return {
        "status": "ok",
        "scheduler_running": services.scheduler.running,
        "next_refresh": next_run.isoformat() if next_run else None
    }


@main_router.get("/channels", response_model=ChannelListResponse)
async def list_channels(
    services: Services,
    refresh: Annotated[bool, Query(description="Re-fetch the directory instead of using the cached one")] = False
) -> ChannelListResponse:
    """List every channel in directory order"""
    channels = await services.load_channels(refresh=refresh)
    return ChannelListResponse(
        total_channels=len(channels),
        channels=[ChannelResponse.from_channel(channel) for channel in channels]
    )


@main_router.get("/channels/{channel_id}/schedule", response_model=ScheduleResponse)
async def get_schedule(
    channel_id: str,
    services: Services,
    detailed: Annotated[bool, Query(description="Include description and image")] = True
) -> ScheduleResponse:
    """
    Build the episode window around now for one channel

    Args:
        channel_id: Channel to query
        detailed: Light mode (False) only returns title and times

    Returns:
        Episodes whose start lies strictly inside the window
    """
    logger.info(f"Schedule requested for channel {channel_id} (detailed={detailed})")
    episodes = await services.builder.build_window(channel_id, services.clock())

    return ScheduleResponse(
        channel_id=channel_id,
        timezone=services.config.timezone,
        detailed=detailed,
        total_episodes=len(episodes),
        episodes=[EpisodeResponse.from_episode(episode, detailed) for episode in episodes]
    )


@main_router.post("/selection")
async def select_channel(request: SelectionRequest, services: Services) -> dict:
    """
    Select a channel and refresh its schedule

    The periodic refresh keeps following the selected channel afterwards.
    """
    logger.info(f"Channel {request.channel_id} selected via API")
    return dict(await services.refresher.select(request.channel_id))


@main_router.get("/selection", response_model=ScheduleResponse)
async def get_selection(
    services: Services,
    detailed: Annotated[bool, Query(description="Include description and image")] = True
) -> ScheduleResponse:
    """Latest schedule delivered for the selected channel"""
    snapshot = services.board.snapshot
    if snapshot.channel_id is None:
        raise HTTPException(status_code=409, detail="No channel selected")

    return ScheduleResponse(
        channel_id=snapshot.channel_id,
        timezone=services.config.timezone,
        detailed=detailed,
        total_episodes=len(snapshot.episodes),
        episodes=[EpisodeResponse.from_episode(episode, detailed) for episode in snapshot.episodes],
        error=snapshot.error,
        updated_at=format_updated_at(snapshot.updated_at)
    )
