"""
Core Utilities.

Shared utility functions used across the package.
All modules should import utilities from this module.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def local_now() -> datetime:
    """Current local time, timezone-aware. Note ids and display dates derive from it."""
    return datetime.now().astimezone()


def format_display_date(value: datetime) -> str:
    """Format a date the way note cards show it, e.g. ``3/7/2026``."""
    return f"{value.month}/{value.day}/{value.year}"


def epoch_millis(value: datetime) -> int:
    """Milliseconds since the Unix epoch for a naive UTC or aware datetime."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)
