"""Time and timezone utilities for article timestamps."""

import re
import email.utils
from datetime import datetime, timezone
from typing import Optional, Union

from veritas.core.logging import get_logger

logger = get_logger(__name__)

# Stand-in for a timestamp that cannot be read: older than anything real.
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

Timestamp = Union[datetime, str, None]


def parse_timestamp(value: Timestamp) -> Optional[datetime]:
    """
    Parse an article timestamp into an aware UTC datetime.

    Handles the formats commonly produced by feed normalizers:
    - datetime instances (naive values are assumed to be UTC)
    - ISO 8601, with or without a trailing ``Z``
    - RFC 2822 (RSS ``pubDate``)
    - a handful of non-standard date/time layouts

    Returns None when the value is missing or cannot be read.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return normalize_timezone(value)

    date_string = str(value).strip()
    if not date_string:
        return None

    iso_candidate = date_string[:-1] + '+00:00' if date_string.endswith('Z') else date_string
    try:
        return normalize_timezone(datetime.fromisoformat(iso_candidate))
    except ValueError:
        pass

    try:
        return normalize_timezone(email.utils.parsedate_to_datetime(date_string))
    except (ValueError, TypeError, IndexError):
        pass

    patterns = [
        r'(\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2})',
        r'(\d{2}/\d{2}/\d{4} \d{2}:\d{2}:\d{2})',
        r'(\d{4}-\d{2}-\d{2})',
        r'(\d{2}/\d{2}/\d{4})',
    ]

    for pattern in patterns:
        match = re.search(pattern, date_string)
        if match:
            dt = _try_parse_formats(match.group(1))
            if dt:
                return dt

    logger.warning(f"Could not parse timestamp: {date_string}")
    return None


def _try_parse_formats(date_string: str) -> Optional[datetime]:
    """Try various datetime formats."""
    formats = [
        '%Y-%m-%dT%H:%M:%S',
        '%Y-%m-%d %H:%M:%S',
        '%m/%d/%Y %H:%M:%S',
        '%Y-%m-%d',
        '%m/%d/%Y',
    ]

    for fmt in formats:
        try:
            return datetime.strptime(date_string, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue

    return None


def normalize_timezone(dt: datetime, target_tz: timezone = timezone.utc) -> datetime:
    """
    Normalize datetime to target timezone.

    Args:
        dt: Input datetime
        target_tz: Target timezone (default UTC)

    Returns:
        Datetime in target timezone
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(target_tz)


def parse_or_epoch(value: Timestamp) -> datetime:
    """Parse a timestamp, treating anything unreadable as maximally old."""
    parsed = parse_timestamp(value)
    return parsed if parsed is not None else EPOCH


def hours_between(earlier: datetime, later: datetime) -> float:
    """Signed number of hours from ``earlier`` to ``later``."""
    delta = normalize_timezone(later) - normalize_timezone(earlier)
    return delta.total_seconds() / 3600


def age_hours(dt: datetime, now: datetime) -> float:
    """Age of ``dt`` in hours relative to an explicit ``now``."""
    return hours_between(dt, now)


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """Format a datetime as ISO 8601 in UTC."""
    if dt is None:
        return None
    return normalize_timezone(dt).isoformat()


def utc_now() -> datetime:
    """Get current time in UTC."""
    return datetime.now(timezone.utc)
