"""
Core Utilities.

Shared utility functions used across the application.
All modules should import utilities from this module.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive and
    assumed to be UTC. Notes, triggers and persisted records all use
    this convention.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_local(value: datetime) -> datetime:
    """Convert a naive UTC datetime to the local timezone."""
    return value.replace(tzinfo=timezone.utc).astimezone()


def to_naive_utc(value: datetime | None) -> datetime | None:
    """
    Normalize a datetime to the naive UTC convention.

    Timezone-aware values are converted to UTC and stripped. Naive values
    are assumed to be UTC already and returned unchanged.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
