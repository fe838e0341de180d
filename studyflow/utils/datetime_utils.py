"""Date and time utilities."""

from datetime import datetime, timezone, tzinfo
from typing import Optional


def local_tz() -> tzinfo:
    return datetime.now().astimezone().tzinfo  # type: ignore


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def to_local(dt: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Convert to the given (or the machine's local) timezone."""
    return ensure_aware(dt).astimezone(tz or local_tz())


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO-8601 string (or pass through a datetime)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_aware(value)
    text = str(value).strip()
    # fromisoformat on older interpreters rejects the trailing Z
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return ensure_aware(datetime.fromisoformat(text))


def format_timestamp(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return ensure_aware(dt).isoformat()


def hours_between(start: datetime, end: datetime) -> float:
    """Signed number of hours from start to end."""
    return (ensure_aware(end) - ensure_aware(start)).total_seconds() / 3600
