"""
Services package for Radio Schedule Service

This package contains the schedule pipeline and its collaborators.
"""
from radioinfo.services.channel_directory import ChannelDirectory
from radioinfo.services.schedule_fetcher import ScheduleFetcher
from radioinfo.services.schedule_window_service import ScheduleWindowBuilder
from radioinfo.services.refresh_coordinator import ScheduleRefresher

__all__ = [
    'ChannelDirectory',
    'ScheduleFetcher',
    'ScheduleWindowBuilder',
    'ScheduleRefresher',
]
