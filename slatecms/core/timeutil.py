# slatecms/core/timeutil.py
from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime | None) -> datetime | None:
    """
    Timezone-aware UTC datetime.
    - Naive values (SQLite drops tzinfo) are taken as UTC without shifting.
    - Aware values are converted with astimezone.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def is_past(dt: datetime | None, *, now: datetime | None = None) -> bool:
    if dt is None:
        return False
    return as_utc(dt) < (now or utcnow())
