"""
Date helpers shared by the result shapers.

MongoDB hands back naive UTC datetimes, ingestion scripts write ISO strings,
and exported data carries extended-JSON ``{"$date": ...}`` wrappers. These
helpers bring all of them to timezone-aware UTC datetimes.
"""

from datetime import datetime, timezone
from typing import Any, Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Parse a datetime, ISO string or epoch-millis number.

    Returns None when the value cannot be interpreted.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return ensure_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def is_extended_json_date(value: Any) -> bool:
    """True for ``{"$date": ...}`` wrappers."""
    return isinstance(value, dict) and "$date" in value


def parse_extended_json_date(value: Any) -> Optional[datetime]:
    """
    Parse the payload of a ``{"$date": ...}`` wrapper.

    The payload may be an ISO string, epoch millis, or ``{"$numberLong": "..."}``.
    """
    if not is_extended_json_date(value):
        return None
    payload = value["$date"]
    if isinstance(payload, dict) and "$numberLong" in payload:
        try:
            payload = int(payload["$numberLong"])
        except (TypeError, ValueError):
            return None
    return parse_datetime(payload)


def to_iso(value: datetime) -> str:
    """ISO 8601 with millisecond precision and a trailing Z."""
    value = ensure_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
