"""Daily activity feed compiled from operational site records."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Iterable, Optional

from progress_engine.config import DEFAULT_CONFIG, EngineConfig
from progress_engine.dates import parse_timestamp
from progress_engine.schema import DailyActivity, DailyTimelineEntry

logger = logging.getLogger(__name__)

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _related(record: dict, relation: str, name: str) -> Optional[str]:
    """Read ``record[relation][name]`` from an embedded relation, if present.

    A relation returned as a list resolves to its first element.
    """

    nested = record.get(relation)
    if isinstance(nested, (list, tuple)):
        nested = nested[0] if nested else None
    if not isinstance(nested, dict):
        return None
    return _text(nested.get(name))


def _first(*values: Optional[str], default: str) -> str:
    for value in values:
        if value:
            return value
    return default


def _count(value: Any) -> int:
    return len(value) if isinstance(value, (list, tuple)) else 0


def from_update(record: dict) -> DailyActivity:
    return DailyActivity(
        id=str(record.get("id", "")),
        type="project_update",
        title=_first(_text(record.get("title")), default="Project Update"),
        description=_text(record.get("description")),
        date=parse_timestamp(record.get("created_at")),
        author=_first(_related(record, "created_by_user", "full_name"), default="System"),
        metadata={
            "update_type": record.get("update_type"),
            "priority": record.get("update_priority"),
            "milestone": _related(record, "milestone", "milestone_name"),
            "photos": _count(record.get("photo_urls")),
        },
    )


def from_photo(record: dict) -> DailyActivity:
    category = _first(_text(record.get("phase_category")), default="Site")
    return DailyActivity(
        id=str(record.get("id", "")),
        type="progress_photo",
        title=_first(_text(record.get("photo_title")), default=f"{category} Photo"),
        description=_first(_text(record.get("description")), default=f"Photo taken for {category} phase"),
        date=parse_timestamp(record.get("date_taken")),
        author=_first(_related(record, "uploaded_by_user", "full_name"), default="Site Team"),
        metadata={
            "photo_url": record.get("photo_url"),
            "phase_category": record.get("phase_category"),
            "photo_type": record.get("photo_type"),
            "processing_status": record.get("processing_status"),
            "views": record.get("views_count"),
            "likes": record.get("likes_count"),
        },
    )


def from_work_session(record: dict) -> DailyActivity:
    task_name = _related(record, "task", "task_name")
    timestamp = parse_timestamp(record.get("created_at")) or parse_timestamp(record.get("session_date"))
    return DailyActivity(
        id=str(record.get("id", "")),
        type="work_session",
        title=f"Work Session: {task_name or 'General Work'}",
        description=_first(
            _text(record.get("work_description")),
            _text(record.get("progress_made")),
            default="Work session completed",
        ),
        date=timestamp,
        author=_first(
            _related(record, "crew_member", "crew_lead_name"),
            _related(record, "created_by_user", "full_name"),
            default="Crew",
        ),
        metadata={
            "duration_hours": record.get("duration_hours"),
            "crew": _related(record, "crew_member", "crew_name"),
            "task": task_name,
            "progress": record.get("progress_made"),
            "issues": record.get("issues_encountered"),
            "weather": record.get("weather_conditions"),
        },
    )


def from_inspection(record: dict) -> DailyActivity:
    inspection_type = _first(_text(record.get("inspection_type")), default="General")
    status = _first(_text(record.get("inspection_status")), default="unknown")
    return DailyActivity(
        id=str(record.get("id", "")),
        type="quality_inspection",
        title=f"Quality Inspection: {inspection_type}",
        description=f"Inspection completed with status: {status}",
        date=parse_timestamp(record.get("inspection_date")),
        author=_first(_related(record, "inspector", "full_name"), default="Quality Inspector"),
        metadata={
            "inspection_type": record.get("inspection_type"),
            "status": record.get("inspection_status"),
            "score": record.get("overall_score"),
            "findings": record.get("findings_summary"),
        },
    )


def from_incident(record: dict) -> DailyActivity:
    incident_type = _first(_text(record.get("incident_type")), default="General")
    return DailyActivity(
        id=str(record.get("id", "")),
        type="safety_incident",
        title=f"Safety Report: {incident_type}",
        description=_text(record.get("description")),
        date=parse_timestamp(record.get("incident_date")),
        author=_first(_related(record, "reported_by_user", "full_name"), default="Safety Officer"),
        metadata={
            "incident_type": record.get("incident_type"),
            "severity": record.get("severity_level"),
            "status": record.get("investigation_status"),
            "injuries": record.get("injury_details"),
        },
    )


def collect_activities(
    updates: Iterable[dict] = (),
    photos: Iterable[dict] = (),
    sessions: Iterable[dict] = (),
    inspections: Iterable[dict] = (),
    incidents: Iterable[dict] = (),
) -> list[DailyActivity]:
    """Map every operational record and sort newest first.

    Records without a readable timestamp cannot be placed on a day and are
    left out.
    """

    sources: tuple[tuple[Callable[[dict], DailyActivity], Iterable[dict]], ...] = (
        (from_update, updates),
        (from_photo, photos),
        (from_work_session, sessions),
        (from_inspection, inspections),
        (from_incident, incidents),
    )

    activities: list[DailyActivity] = []
    for mapper, records in sources:
        for record in records or ():
            activity = mapper(record)
            if activity.date is None:
                logger.debug("Dropping %s %r without a timestamp", activity.type, activity.id)
                continue
            activities.append(activity)

    # Equal timestamps order by type, then id.
    activities.sort(key=lambda a: (a.type, a.id))
    activities.sort(key=lambda a: a.date, reverse=True)
    return activities


def format_day(day: date) -> str:
    """Long English day label, e.g. ``Friday, 10 January 2025``."""

    return f"{_WEEKDAYS[day.weekday()]}, {day.day} {_MONTHS[day.month - 1]} {day.year}"


def group_by_day(activities: list[DailyActivity], config: EngineConfig = DEFAULT_CONFIG) -> list[DailyTimelineEntry]:
    """Bucket newest-first activities by UTC calendar day and apply the caps."""

    buckets: dict[date, list[DailyActivity]] = {}
    for activity in activities:
        buckets.setdefault(activity.date.date(), []).append(activity)

    entries = []
    for day in sorted(buckets, reverse=True)[: config.max_timeline_days]:
        day_activities = buckets[day]
        entries.append(
            DailyTimelineEntry(
                date=day.isoformat(),
                date_formatted=format_day(day),
                activities_count=len(day_activities),
                activities=day_activities[: config.max_activities_per_day],
            )
        )
    return entries


def compile_daily_activities(
    updates: Iterable[dict] = (),
    photos: Iterable[dict] = (),
    sessions: Iterable[dict] = (),
    inspections: Iterable[dict] = (),
    incidents: Iterable[dict] = (),
    config: Optional[EngineConfig] = None,
) -> list[DailyTimelineEntry]:
    """Compile the five operational record lists into the grouped daily feed."""

    activities = collect_activities(updates, photos, sessions, inspections, incidents)
    return group_by_day(activities, config or DEFAULT_CONFIG)
