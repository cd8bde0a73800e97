"""Timestamp helpers for server-assigned columns."""

from __future__ import annotations

from datetime import datetime, timezone

# Strict output format: YYYY-MM-DD HH:MM:SS.ffffff±HHMM
STRICT_FORMAT = "%Y-%m-%d %H:%M:%S.%f%z"


def format_datetime(dt: datetime) -> str:
    """Format a datetime to the strict output format.

    Naive datetimes are treated as UTC. Strings in this format sort
    chronologically as long as they share an offset.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.strftime(STRICT_FORMAT)


def now_utc() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def timestamp_now() -> str:
    """Return the current UTC time in the strict output format."""
    return format_datetime(now_utc())
