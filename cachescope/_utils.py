from __future__ import annotations

import calendar
import typing as tp
from datetime import datetime, timezone
from email.utils import parsedate_tz

T = tp.TypeVar("T", bound=tp.Hashable)


def parse_date(date: str) -> tp.Optional[datetime]:
    """
    Parse an HTTP-date (RFC 9110 Section 5.6.7) into an aware UTC datetime.

    Returns None when the value is not a date, e.g. the common ``Expires: 0``.

    Examples:
        >>> parse_date("Wed, 21 Oct 2015 07:28:00 GMT")
        datetime.datetime(2015, 10, 21, 7, 28, tzinfo=datetime.timezone.utc)
        >>> parse_date("0") is None
        True
    """
    parsed = parsedate_tz(date)
    if parsed is None:
        return None
    try:
        timestamp = calendar.timegm(parsed[:6]) - (parsed[9] or 0)
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        # year out of range for datetime
        return None


def to_milliseconds(date: datetime) -> float:
    """Convert a datetime to milliseconds since the epoch, reading naive values as UTC."""
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    return date.timestamp() * 1000


def deduplicate(items: tp.Iterable[T]) -> tp.List[T]:
    """
    Remove duplicates while keeping the first occurrence of each item.

    Example:
        ```
        deduplicate(["node1", "node1", "node2"])  # ["node1", "node2"]
        ```
    """
    return list(dict.fromkeys(items))
