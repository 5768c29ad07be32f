from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional


def _to_utc_naive(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def parse_api_timestamp(value: Any) -> Optional[datetime]:
    """
    Read a POS API timestamp (createdAt/updatedAt) as a UTC-naive datetime.

    - None / "" -> None
    - datetime -> normalized to UTC-naive
    - "2025-01-04T10:15:30.123Z" and other ISO-8601 strings; a naive string
      is taken as UTC

    Raises ValueError for anything else.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _to_utc_naive(value)
    if not isinstance(value, str):
        raise ValueError(f"Unreadable timestamp: {value!r}")

    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    return _to_utc_naive(datetime.fromisoformat(text))


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Serialize to ISO-8601 with a trailing 'Z', whole seconds.
    Naive datetimes are treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
