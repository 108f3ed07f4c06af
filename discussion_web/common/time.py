"""
Time Utilities

File timestamps are exposed as UTC-aware datetimes and rendered as HTTP dates.
"""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional

UTC = timezone.utc


def from_timestamp(timestamp: float) -> datetime:
    """Convert a POSIX timestamp (e.g. ``st_mtime``) to a UTC-aware datetime."""
    return datetime.fromtimestamp(timestamp, UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure a datetime is UTC-aware.

    - If `dt` is naive, treat it as UTC.
    - If `dt` is timezone-aware, convert it to UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def http_date(dt: datetime) -> str:
    """Format a datetime as an RFC 7231 HTTP date (``Last-Modified`` header)."""
    return format_datetime(ensure_utc(dt).replace(microsecond=0), usegmt=True)
