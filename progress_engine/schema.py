"""Core data schema for schedule items, stats and the daily activity feed."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

SCHEDULE_TYPES = ("phase", "task", "milestone", "event")
ACTIVITY_TYPES = (
    "project_update",
    "progress_photo",
    "work_session",
    "quality_inspection",
    "safety_incident",
)

HEALTH_ON_TRACK = "on_track"
HEALTH_AT_RISK = "at_risk"
HEALTH_DELAYED = "delayed"

UNKNOWN_STATUS = "unknown"


@dataclass(frozen=True)
class TimelineItem:
    """Normalized schedule item used by all stat computations.

    Dates and progress are optional; ``None`` means unknown, never zero.
    """

    id: str
    source_type: str
    status: str
    title: Optional[str] = None
    planned_start: Optional[datetime] = None
    planned_end: Optional[datetime] = None
    progress_percentage: Optional[float] = None


@dataclass
class StatusBreakdown:
    """Status counts for one subset of timeline items."""

    total: int = 0
    completed: int = 0
    in_progress: int = 0
    not_started: int = 0
    delayed: int = 0
    overdue: int = 0
    upcoming: int = 0


@dataclass
class ScheduleStats:
    total_items: int = 0
    completed_items: int = 0
    in_progress_items: int = 0
    not_started_items: int = 0
    overdue_items: int = 0
    upcoming_items: int = 0
    delayed_count: int = 0
    overall_progress: int = 0
    schedule_health: str = HEALTH_ON_TRACK
    by_type: dict[str, StatusBreakdown] = field(default_factory=dict)


@dataclass(frozen=True)
class DailyActivity:
    """One operational record mapped into the common feed shape."""

    id: str
    type: str
    title: str
    description: Optional[str]
    date: datetime
    author: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class DailyTimelineEntry:
    date: str
    date_formatted: str
    activities_count: int
    activities: list[DailyActivity] = field(default_factory=list)


@dataclass
class DailyStats:
    total_daily_updates: int = 0
    recent_photos: int = 0
    recent_work_sessions: int = 0
    pending_quality_inspections: int = 0
    safety_incidents_this_month: int = 0


@dataclass
class AggregateResult:
    items: list[TimelineItem]
    stats: ScheduleStats
    daily_timeline: list[DailyTimelineEntry]
    daily_stats: DailyStats


@dataclass
class ProjectRecords:
    """Raw record lists for one project, as fetched by the persistence layer."""

    phases: list[dict] = field(default_factory=list)
    tasks: list[dict] = field(default_factory=list)
    milestones: list[dict] = field(default_factory=list)
    events: list[dict] = field(default_factory=list)
    updates: list[dict] = field(default_factory=list)
    photos: list[dict] = field(default_factory=list)
    sessions: list[dict] = field(default_factory=list)
    inspections: list[dict] = field(default_factory=list)
    incidents: list[dict] = field(default_factory=list)


@dataclass
class PortfolioStats:
    """Overview counts across every active project schedule."""

    total_projects: int = 0
    active_projects: int = 0
    completed_projects: int = 0
    delayed_projects: int = 0
    projects_on_schedule: int = 0
    overall_completion: int = 0
    total_tasks: int = 0
    completed_tasks: int = 0
    total_phases: int = 0
    completed_phases: int = 0
