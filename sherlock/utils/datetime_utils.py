"""
Centralized DateTime Utilities
==============================

Consistent datetime handling across the application.

Functions:
- utc_now(): timezone-aware UTC datetime, used for everything persisted to MongoDB
- ensure_utc(): normalize naive/aware datetimes read back from MongoDB into UTC
- now(): timezone-aware datetime in the configured LOCAL_TIMEZONE (human-facing text)
- to_iso(): ISO 8601 string for API payloads
- epoch_millis(): integer milliseconds since the epoch (collision-resistant file names)
"""
import logging
import time
import zoneinfo
from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import Optional

from ..core.config import get_settings

logger = logging.getLogger(__name__)


def _get_app_timezone() -> tzinfo:
    """
    Get the application timezone from config.
    Returns UTC if the configured name is unknown.
    """
    tz_str = get_settings().local_timezone

    if tz_str.upper() == "UTC":
        return dt_timezone.utc

    try:
        return zoneinfo.ZoneInfo(tz_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Invalid timezone '{tz_str}', falling back to UTC")
        return dt_timezone.utc


def utc_now() -> datetime:
    """
    Get current UTC time as a timezone-aware datetime.

    Use this for all timestamps that will be persisted to MongoDB (BSON Date).
    """
    return datetime.now(dt_timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime into a timezone-aware UTC datetime.

    - If dt is None -> None
    - If dt is naive -> assume it represents UTC (this matches MongoDB/PyMongo behavior)
    - If dt is aware -> convert to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)


def now() -> datetime:
    """Current datetime in the application-configured timezone."""
    return datetime.now(_get_app_timezone())


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime object to ISO 8601 string.
    Naive datetimes are treated as UTC. UTC is rendered with a trailing 'Z'.
    """
    if dt is None:
        return None

    dt = ensure_utc(dt)
    return dt.replace(microsecond=0).isoformat().replace("+00:00", "Z")


def epoch_millis() -> int:
    """Milliseconds since the Unix epoch."""
    return int(time.time() * 1000)
