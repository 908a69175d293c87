"""
Structured logging helpers for consistent log formatting.

Provides utilities for structured, clean logging without excessive decorative separators.
"""
import logging
from datetime import datetime, timezone


def log_section_start(logger: logging.Logger, section_name: str) -> None:
    """
    Log the start of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being started
    """
    logger.info(f"Starting: {section_name}")


def log_section_end(logger: logging.Logger, section_name: str) -> None:
    """
    Log the end of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being ended
    """
    logger.info(f"Completed: {section_name}")


def log_refresh_start(logger: logging.Logger, channel_id: str, generation: int) -> None:
    """Log schedule refresh start."""
    logger.info(
        f"Schedule refresh for channel {channel_id} (generation {generation}) "
        f"started at {datetime.now(timezone.utc).isoformat()}"
    )


def log_window_summary(
    logger: logging.Logger,
    channel_id: str,
    window_start: datetime,
    window_end: datetime,
    fetched_count: int,
    kept_count: int
) -> None:
    """
    Log window filtering summary.

    Args:
        logger: Logger instance
        channel_id: Channel the window was built for
        window_start: Exclusive lower bound
        window_end: Exclusive upper bound
        fetched_count: Episodes returned by the three date fetches
        kept_count: Episodes inside the window
    """
    logger.info(
        f"Window summary - Channel: {channel_id}, "
        f"Window: {window_start.isoformat()} -> {window_end.isoformat()}, "
        f"Fetched: {fetched_count}, Kept: {kept_count}"
    )
