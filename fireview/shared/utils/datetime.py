"""UTC datetime helpers and RFC 3339 conversion for Firestore timestamps.

Datetimes inside the console are timezone-aware UTC. Naive values coming
from user JSON are taken to be UTC.
"""

import re
from datetime import UTC, datetime

# Firestore emits up to nanosecond precision; datetime holds microseconds.
_FRACTION_RE = re.compile(r"\.(\d{6})\d+")


def utc_now() -> datetime:
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to a naive datetime, or convert an aware one to UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_rfc3339(dt: datetime) -> str:
    """Format as '2024-05-01T10:00:00.123456Z'."""
    return ensure_utc(dt).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def parse_rfc3339(value: str) -> datetime:
    """Parse a Firestore timestamp; digits beyond microseconds are dropped.

    Args:
        value: Timestamp such as '2024-05-01T10:00:00.123456789Z' or with
            an explicit offset.

    Returns:
        UTC-aware datetime.
    """
    normalized = _FRACTION_RE.sub(r".\1", value.replace("Z", "+00:00"))
    return ensure_utc(datetime.fromisoformat(normalized))
