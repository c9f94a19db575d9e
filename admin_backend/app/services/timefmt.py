# app/services/timefmt.py
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def millis_to_iso(ms: Any) -> Optional[str]:
    """Epoch millis -> `2024-01-31T12:00:00.000Z`; falsy or unparsable -> None."""
    if not ms or isinstance(ms, bool):
        return None
    try:
        dt = _EPOCH + timedelta(milliseconds=float(ms))
    except (TypeError, ValueError, OverflowError):
        return None
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def iso_to_millis(value: Optional[str]) -> int:
    """Inverse of `millis_to_iso`; missing values sort as epoch 0."""
    if not value:
        return 0
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return 0
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - _EPOCH) // timedelta(milliseconds=1)


def to_datetime(value: Any) -> Optional[datetime]:
    """Firestore timestamps arrive as datetime subclasses; anything else is not a time."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return None


def to_iso(value: Any) -> Optional[str]:
    """Same `...T00:00:00.000Z` shape as `millis_to_iso`."""
    dt = to_datetime(value)
    if dt is None:
        return None
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def days_after(value: datetime, days: int) -> datetime:
    return value + timedelta(days=days)
