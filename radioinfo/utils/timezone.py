"""
Date and Time utilities

This module handles all date/time conversions, parsing, and schedule window calculations.
Centralizes all date parsing logic to maintain consistency across the application.
"""
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo
import logging

logger = logging.getLogger(__name__)

DISPLAY_FORMAT = "%m-%d %H:%M"
QUERY_DATE_FORMAT = "%Y-%m-%d"


class DateFormatError(ValueError):
    """Raised when date format is invalid"""
    pass


def _normalize_iso8601_string(date_str: str) -> str:
    """Normalize ISO8601 string by replacing 'Z' with '+00:00'

    Args:
        date_str: ISO8601 datetime string

    Returns:
        Normalized string with explicit timezone offset
    """
    date_str = date_str.strip()
    return date_str[:-1] + '+00:00' if date_str.endswith('Z') else date_str


def parse_iso8601_to_utc(date_str: str) -> datetime:
    """
    Parse ISO8601 date string and convert to UTC datetime

    This is the single source of truth for date parsing across the application.

    Args:
        date_str: ISO8601 datetime string (e.g., '2025-01-26T10:00:00Z' or '2025-01-26T11:00:00+01:00')

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        DateFormatError: If the date string format is invalid
    """
    try:
        normalized = _normalize_iso8601_string(date_str)
        dt = datetime.fromisoformat(normalized)
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    except (ValueError, AttributeError) as e:
        raise DateFormatError(f"Invalid ISO8601 datetime format: '{date_str}'") from e


def to_local(dt: datetime, target_tz: str) -> datetime:
    """Convert an aware datetime to the target IANA timezone"""
    return dt.astimezone(ZoneInfo(target_tz))


def format_display_time(dt: datetime) -> str:
    """Format a local datetime the way schedules are displayed ('MM-dd HH:mm')"""
    return dt.strftime(DISPLAY_FORMAT)


def format_query_date(day: date) -> str:
    """Format a calendar date for the scheduled episodes endpoint ('yyyy-MM-dd')"""
    return day.strftime(QUERY_DATE_FORMAT)


def surrounding_dates(now: datetime, target_tz: str) -> tuple[date, date, date]:
    """
    Calendar dates to query around now, in fetch order

    Args:
        now: Current instant (any timezone)
        target_tz: Timezone whose calendar day is used

    Returns:
        Tuple of (today, tomorrow, yesterday)
    """
    today = to_local(now, target_tz).date()
    return today, today + timedelta(days=1), today - timedelta(days=1)


def calculate_time_window(now: datetime, hours: int) -> tuple[datetime, datetime]:
    """
    Calculate the open window around now

    Arithmetic is done on absolute instants so DST transitions do not skew it.

    Args:
        now: Current instant (timezone-aware)
        hours: Half-width of the window

    Returns:
        Tuple of (window_start, window_end) in UTC
    """
    now_utc = now.astimezone(timezone.utc)
    span = timedelta(hours=hours)
    return now_utc - span, now_utc + span


def reattach_year(display_time: str, year: int, target_tz: str) -> datetime:
    """
    Rebuild an instant from a 'MM-dd HH:mm' string by stamping it with a year

    Args:
        display_time: Local display string without a year
        year: Year to attach
        target_tz: Timezone the display string is expressed in

    Returns:
        Timezone-aware datetime in target_tz

    Raises:
        DateFormatError: If the display string cannot be parsed
    """
    try:
        naive = datetime.strptime(f"{year}-{display_time}", f"%Y-{DISPLAY_FORMAT}")
    except ValueError as e:
        raise DateFormatError(f"Invalid display time: '{display_time}'") from e
    return naive.replace(tzinfo=ZoneInfo(target_tz))


def now_in(target_tz: str) -> datetime:
    """Current wall-clock instant in the target timezone"""
    return datetime.now(ZoneInfo(target_tz))
