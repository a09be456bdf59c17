"""JSON-safe payloads with the camelCase keys the dashboard clients read."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from progress_engine.schema import (
    AggregateResult,
    DailyActivity,
    DailyStats,
    DailyTimelineEntry,
    PortfolioStats,
    ScheduleStats,
    StatusBreakdown,
    TimelineItem,
)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def item_payload(item: TimelineItem) -> dict:
    return {
        "id": item.id,
        "sourceType": item.source_type,
        "status": item.status,
        "title": item.title,
        "plannedStart": _iso(item.planned_start),
        "plannedEnd": _iso(item.planned_end),
        "progressPercentage": item.progress_percentage,
    }


def breakdown_payload(breakdown: StatusBreakdown) -> dict:
    return {
        "total": breakdown.total,
        "completed": breakdown.completed,
        "inProgress": breakdown.in_progress,
        "notStarted": breakdown.not_started,
        "delayed": breakdown.delayed,
        "overdue": breakdown.overdue,
        "upcoming": breakdown.upcoming,
    }


def stats_payload(stats: ScheduleStats) -> dict:
    return {
        "totalItems": stats.total_items,
        "completedItems": stats.completed_items,
        "inProgressItems": stats.in_progress_items,
        "notStartedItems": stats.not_started_items,
        "overdueItems": stats.overdue_items,
        "upcomingItems": stats.upcoming_items,
        "delayedCount": stats.delayed_count,
        "overallProgress": stats.overall_progress,
        "scheduleHealth": stats.schedule_health,
        "byType": {source_type: breakdown_payload(b) for source_type, b in stats.by_type.items()},
    }


def activity_payload(activity: DailyActivity) -> dict:
    return {
        "id": activity.id,
        "type": activity.type,
        "title": activity.title,
        "description": activity.description,
        "date": _iso(activity.date),
        "author": activity.author,
        "metadata": {key: _plain(value) for key, value in activity.metadata.items()},
    }


def entry_payload(entry: DailyTimelineEntry) -> dict:
    return {
        "date": entry.date,
        "dateFormatted": entry.date_formatted,
        "activitiesCount": entry.activities_count,
        "activities": [activity_payload(a) for a in entry.activities],
    }


def daily_stats_payload(daily: DailyStats) -> dict:
    return {
        "totalDailyUpdates": daily.total_daily_updates,
        "recentPhotos": daily.recent_photos,
        "recentWorkSessions": daily.recent_work_sessions,
        "pendingQualityInspections": daily.pending_quality_inspections,
        "safetyIncidentsThisMonth": daily.safety_incidents_this_month,
    }


def portfolio_payload(portfolio: PortfolioStats) -> dict:
    return {
        "totalProjects": portfolio.total_projects,
        "activeProjects": portfolio.active_projects,
        "completedProjects": portfolio.completed_projects,
        "delayedProjects": portfolio.delayed_projects,
        "projectsOnSchedule": portfolio.projects_on_schedule,
        "overallCompletion": portfolio.overall_completion,
        "totalTasks": portfolio.total_tasks,
        "completedTasks": portfolio.completed_tasks,
        "totalPhases": portfolio.total_phases,
        "completedPhases": portfolio.completed_phases,
    }


def _plain(value: Any) -> Any:
    """Coerce loosely-typed metadata into JSON-safe values."""

    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return str(value)


def to_payload(result: AggregateResult) -> dict:
    """Serialize an aggregate into the response body shape."""

    return {
        "items": [item_payload(item) for item in result.items],
        "stats": stats_payload(result.stats),
        "dailyTimeline": [entry_payload(entry) for entry in result.daily_timeline],
        "dailyStats": daily_stats_payload(result.daily_stats),
    }
