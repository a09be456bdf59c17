"""Now-relative date helpers shared by every schedule computation."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

from progress_engine.schema import TimelineItem

_CLOSED_STATUSES = {"completed", "cancelled"}
_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Return a UTC-aware datetime for ``value`` or ``None`` when it cannot be read.

    Naive values and date-only strings are taken as UTC.
    """

    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        # fromisoformat on 3.10 only reads 3 or 6 fraction digits.
        text = _FRACTION.sub(lambda m: f"{m.group(1)}.{(m.group(2) + '000000')[:6]}", text, count=1)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def as_utc(now: datetime) -> datetime:
    if not isinstance(now, datetime):
        raise TypeError(f"now must be a datetime, got {type(now).__name__}")
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def is_overdue(item: TimelineItem, now: datetime) -> bool:
    """True when the planned end has passed and the item is still open."""

    if item.planned_end is None:
        return False
    if item.status in _CLOSED_STATUSES:
        return False
    return item.planned_end < as_utc(now)


def is_upcoming(item: TimelineItem, now: datetime, horizon_days: int = 7) -> bool:
    """True when the planned start falls within ``[now, now + horizon_days]``."""

    if item.planned_start is None or item.status == "completed":
        return False
    start = as_utc(now)
    return start <= item.planned_start <= start + timedelta(days=horizon_days)


def days_between(earlier: Optional[datetime], now: datetime) -> Optional[float]:
    """Elapsed days from ``earlier`` to ``now``; ``None`` when ``earlier`` is unknown."""

    if earlier is None:
        return None
    return (as_utc(now) - earlier).total_seconds() / 86400.0
