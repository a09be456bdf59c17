"""Normalize raw schedule records (phases, tasks, milestones, events) into timeline items."""

from __future__ import annotations

import math
from typing import Any, Iterable, Optional

from progress_engine.dates import parse_timestamp
from progress_engine.schema import SCHEDULE_TYPES, UNKNOWN_STATUS, TimelineItem

# First non-null field wins.
_START_FIELDS = {
    "phase": ("planned_start_date", "planned_start", "start_datetime"),
    "task": ("planned_start_date", "planned_start", "start_datetime"),
    "milestone": ("planned_start_date", "planned_start", "start_datetime"),
    "event": ("planned_start_date", "planned_start", "start_datetime"),
}
_END_FIELDS = {
    "phase": ("planned_end_date", "planned_end", "end_datetime"),
    "task": ("planned_end_date", "planned_end", "end_datetime"),
    "milestone": ("planned_end_date", "planned_end", "end_datetime"),
    "event": ("planned_end_date", "planned_end", "end_datetime"),
}
_TITLE_FIELDS = {
    "phase": ("phase_name",),
    "task": ("task_name",),
    "milestone": ("milestone_name",),
    "event": ("event_title",),
}

# Calendar events have no lifecycle field of their own.
_FIXED_STATUS = {"event": "scheduled"}


def _first_present(record: dict, candidates: tuple[str, ...]) -> Any:
    for name in candidates:
        value = record.get(name)
        if value is not None:
            return value
    return None


def _progress(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _status(source_type: str, record: dict) -> str:
    if source_type in _FIXED_STATUS:
        return _FIXED_STATUS[source_type]
    raw = record.get("status")
    if raw is None:
        return UNKNOWN_STATUS
    text = str(raw).strip()
    return text or UNKNOWN_STATUS


def normalize(source_type: str, record: dict) -> TimelineItem:
    """Map one raw schedule record into a ``TimelineItem``.

    Missing or malformed optional fields become ``None``; nothing raises for
    bad record content. An unsupported ``source_type`` is a programming error
    and raises ``ValueError``.
    """

    if source_type not in SCHEDULE_TYPES:
        raise ValueError(f"Unsupported schedule type '{source_type}'")

    title = _first_present(record, _TITLE_FIELDS[source_type])
    progress = None if source_type == "event" else _progress(record.get("progress_percentage"))

    return TimelineItem(
        id=str(record.get("id", "")),
        source_type=source_type,
        status=_status(source_type, record),
        title=str(title) if title is not None else None,
        planned_start=parse_timestamp(_first_present(record, _START_FIELDS[source_type])),
        planned_end=parse_timestamp(_first_present(record, _END_FIELDS[source_type])),
        progress_percentage=progress,
    )


def normalize_all(
    phases: Iterable[dict] = (),
    tasks: Iterable[dict] = (),
    milestones: Iterable[dict] = (),
    events: Iterable[dict] = (),
) -> list[TimelineItem]:
    """Normalize every schedule record, keeping phase, task, milestone, event order."""

    items: list[TimelineItem] = []
    for source_type, records in (("phase", phases), ("task", tasks), ("milestone", milestones), ("event", events)):
        items.extend(normalize(source_type, record) for record in records or ())
    return items
