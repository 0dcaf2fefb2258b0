import time
from datetime import datetime, timezone
from typing import Optional


def get_time_stamp():
    return datetime.now(timezone.utc)


def to_utc_aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def deadline_from_timeout(seconds: Optional[float]) -> Optional[float]:
    """Turn a relative timeout into an absolute ``time.monotonic()`` deadline."""
    if seconds is None:
        return None
    return time.monotonic() + seconds


def deadline_passed(deadline: Optional[float]) -> bool:
    return deadline is not None and time.monotonic() >= deadline
