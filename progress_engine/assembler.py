"""Top-level aggregation of one project's schedule and site activity."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from progress_engine.activities import collect_activities, group_by_day
from progress_engine.config import DEFAULT_CONFIG, EngineConfig
from progress_engine.daily_stats import compute_daily_stats
from progress_engine.dates import as_utc
from progress_engine.metrics import compute_stats
from progress_engine.normalizer import normalize_all
from progress_engine.schema import AggregateResult, ProjectRecords

logger = logging.getLogger(__name__)


def assemble(
    phases: list[dict],
    tasks: list[dict],
    milestones: list[dict],
    events: list[dict],
    updates: list[dict],
    photos: list[dict],
    sessions: list[dict],
    inspections: list[dict],
    incidents: list[dict],
    now: datetime,
    config: Optional[EngineConfig] = None,
) -> AggregateResult:
    """Build items, stats and the daily feed from fully fetched record lists.

    ``now`` is read once and reused by every sub-computation, so identical
    inputs always give identical output. Source records are never mutated.
    """

    config = config or DEFAULT_CONFIG
    now = as_utc(now)

    phases, tasks, milestones, events = phases or [], tasks or [], milestones or [], events or []
    updates, photos, sessions = updates or [], photos or [], sessions or []
    inspections, incidents = inspections or [], incidents or []

    items = normalize_all(phases, tasks, milestones, events)
    stats = compute_stats(items, now, config)

    activities = collect_activities(updates, photos, sessions, inspections, incidents)
    daily_timeline = group_by_day(activities, config)
    daily_stats = compute_daily_stats(
        updates, photos, sessions, inspections, incidents, now, config, total_activities=len(activities)
    )

    logger.debug(
        "Aggregated %d items (%d completed, %d overdue, health=%s) and %d activities over %d days",
        stats.total_items,
        stats.completed_items,
        stats.overdue_items,
        stats.schedule_health,
        len(activities),
        len(daily_timeline),
    )
    return AggregateResult(items=items, stats=stats, daily_timeline=daily_timeline, daily_stats=daily_stats)


def assemble_records(records: ProjectRecords, now: datetime, config: Optional[EngineConfig] = None) -> AggregateResult:
    """Run ``assemble`` over a ``ProjectRecords`` bundle."""

    return assemble(
        records.phases,
        records.tasks,
        records.milestones,
        records.events,
        records.updates,
        records.photos,
        records.sessions,
        records.inspections,
        records.incidents,
        now=now,
        config=config,
    )
